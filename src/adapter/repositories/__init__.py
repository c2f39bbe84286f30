from .project_repository import SqlAlchemyProjectRepository
from .contract_repository import SqlAlchemyContractRepository
from .task_repository import SqlAlchemyTaskRepository
from .invoice_repository import SqlAlchemyInvoiceRepository
from .invoiced_task_repository import SqlAlchemyInvoicedTaskRepository
from .payment_repository import SqlAlchemyPaymentRepository
from .platform_invoice_repository import SqlAlchemyPlatformInvoiceRepository
from .wallet_repository import SqlAlchemyWalletRepository
from .payment_method_repository import SqlAlchemyPaymentMethodRepository
from .payout_method_repository import SqlAlchemyPayoutMethodRepository

__all__ = [
    "SqlAlchemyProjectRepository",
    "SqlAlchemyContractRepository",
    "SqlAlchemyTaskRepository",
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyInvoicedTaskRepository",
    "SqlAlchemyPaymentRepository",
    "SqlAlchemyPlatformInvoiceRepository",
    "SqlAlchemyWalletRepository",
    "SqlAlchemyPaymentMethodRepository",
    "SqlAlchemyPayoutMethodRepository",
]
