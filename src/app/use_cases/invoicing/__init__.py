"""Invoicing use cases"""
from .emit_invoice import EmitInvoice
from .redownload_invoice import RedownloadInvoice
from .list_invoice_history import ListInvoiceHistory
from .mapper import RecordMapper
from .totals import TotalPolicy, reconcile_total
from .dtos import (
    LineItemDTO,
    InvoiceDataDTO,
    InvoiceDocumentDTO,
    InvoiceRecordDTO,
    InvoiceLineRecordDTO,
)

__all__ = [
    "EmitInvoice",
    "RedownloadInvoice",
    "ListInvoiceHistory",
    "RecordMapper",
    "TotalPolicy",
    "reconcile_total",
    "LineItemDTO",
    "InvoiceDataDTO",
    "InvoiceDocumentDTO",
    "InvoiceRecordDTO",
    "InvoiceLineRecordDTO",
]
