from .base import BaseModel
from .invoice import Invoice
from .invoice_line import InvoiceLine

__all__ = [
    "BaseModel",
    "Invoice",
    "InvoiceLine",
]
