"""Background workers for invoice settlement"""
from .invoice_settler import InvoiceSettlerWorker

__all__ = ["InvoiceSettlerWorker"]
