from .project_repository import ProjectRepository
from .contract_repository import ContractRepository
from .task_repository import TaskRepository
from .invoice_repository import InvoiceRepository
from .invoiced_task_repository import InvoicedTaskRepository
from .payment_repository import PaymentRepository
from .platform_invoice_repository import PlatformInvoiceRepository
from .wallet_repository import WalletRepository
from .payment_method_repository import PaymentMethodRepository
from .payout_method_repository import PayoutMethodRepository

__all__ = [
    "ProjectRepository",
    "ContractRepository",
    "TaskRepository",
    "InvoiceRepository",
    "InvoicedTaskRepository",
    "PaymentRepository",
    "PlatformInvoiceRepository",
    "WalletRepository",
    "PaymentMethodRepository",
    "PayoutMethodRepository",
]
