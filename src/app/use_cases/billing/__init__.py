"""Billing domain use cases"""
from .invoice_ledger import InvoiceLedger
from .project_funds import ProjectFunds
from .elect_contributor import ContributorElector
from .settlement import (
    SettlementContext,
    PreconditionStage,
    ExecutionStage,
    RecordingStage,
    SettlementPipeline,
)
from .activate_methods import ActivateWallet, ActivatePaymentMethod, ActivatePayoutMethod
from .create_payment_setup_handle import CreatePaymentSetupHandle
from .generate_invoice_pdf import GenerateInvoicePdf
from .dtos import (
    InvoiceResponseDTO,
    InvoicedTaskResponseDTO,
    PaymentResponseDTO,
    ElectionResponseDTO,
    ActivationResponseDTO,
    PaymentSetupResponseDTO,
    InvoicePdfResponseDTO,
    SettlementRunResultDTO,
)

__all__ = [
    "InvoiceLedger",
    "ProjectFunds",
    "ContributorElector",
    "SettlementContext",
    "PreconditionStage",
    "ExecutionStage",
    "RecordingStage",
    "SettlementPipeline",
    "ActivateWallet",
    "ActivatePaymentMethod",
    "ActivatePayoutMethod",
    "CreatePaymentSetupHandle",
    "GenerateInvoicePdf",
    "InvoiceResponseDTO",
    "InvoicedTaskResponseDTO",
    "PaymentResponseDTO",
    "ElectionResponseDTO",
    "ActivationResponseDTO",
    "PaymentSetupResponseDTO",
    "InvoicePdfResponseDTO",
    "SettlementRunResultDTO",
]
