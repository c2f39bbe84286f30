from .base import BaseModel, generate_uuid
from .billing_info import BillingInfo
from .contract import Contract, ContractId, ContractRole
from .contributor import Contributor, PayoutMethod, PayoutMethodType
from .invoice import Invoice
from .invoiced_task import InvoicedTask
from .payment import Payment, PaymentStatus
from .platform_invoice import PlatformInvoice
from .project import Project
from .task import Task, Resignation
from .wallet import Wallet, WalletType, PaymentMethod

__all__ = [
    "BaseModel",
    "generate_uuid",
    "BillingInfo",
    "Contract",
    "ContractId",
    "ContractRole",
    "Contributor",
    "PayoutMethod",
    "PayoutMethodType",
    "Invoice",
    "InvoicedTask",
    "Payment",
    "PaymentStatus",
    "PlatformInvoice",
    "Project",
    "Task",
    "Resignation",
    "Wallet",
    "WalletType",
    "PaymentMethod",
]
