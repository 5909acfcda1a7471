"""Data Transfer Objects for Invoicing Use Cases

Pydantic models for the transmission form of an invoice and for use case
outputs. Amounts in the transmission form are decimal-formatted strings.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class LineItemDTO(BaseModel):
    """One billable line in transmission form"""

    code: str = Field(..., description="Product / service code")
    description: str = Field(..., description="Line description")
    quantity: str = Field(..., description="Quantity as decimal text (e.g., '1')")
    unit_price: str = Field(..., description="Unit price as decimal text (e.g., '150.00')")
    line_total: str = Field(..., description="Line total as decimal text (e.g., '150.00')")


class InvoiceDataDTO(BaseModel):
    """
    Invoice in transmission form

    Used as input to EmitInvoice and reconstructed from a stored record by
    RedownloadInvoice. The order of items is the row order of the document.
    """

    customer_name: str = Field(..., description="Customer name / company name")
    tax_id: Optional[str] = Field(default=None, description="CPF / CNPJ")
    full_address: Optional[str] = Field(default=None, description="Street address")
    neighborhood: Optional[str] = Field(default=None, description="Neighborhood / district")
    city_state: Optional[str] = Field(default=None, description="City / state")
    total_amount: str = Field(..., description="Invoice total as decimal text")
    items: List[LineItemDTO] = Field(default_factory=list, description="Ordered line items")

    class Config:
        json_schema_extra = {
            "example": {
                "customer_name": "Maria Silva",
                "tax_id": "123.456.789-00",
                "full_address": "Rua das Flores, 10",
                "neighborhood": "Centro",
                "city_state": "Campinas/SP",
                "total_amount": "150.00",
                "items": [
                    {
                        "code": "C1",
                        "description": "Consulta",
                        "quantity": "1",
                        "unit_price": "150.00",
                        "line_total": "150.00"
                    }
                ]
            }
        }


class InvoiceDocumentDTO(BaseModel):
    """Rendered PDF ready to be sent to the caller"""

    filename: str = Field(..., description="Download filename")
    content: bytes = Field(..., description="PDF bytes")
    invoice_id: Optional[int] = Field(
        default=None,
        description="Stored invoice ID (None when history persistence failed)"
    )


class InvoiceLineRecordDTO(BaseModel):
    """Persisted line item as returned by the history listing"""

    id: int
    position: int
    code: str
    description: str
    quantity: Decimal
    unit_price: Decimal
    line_total: Decimal


class InvoiceRecordDTO(BaseModel):
    """Persisted invoice as returned by the history listing"""

    id: int
    customer_name: str
    tax_id: Optional[str] = None
    full_address: Optional[str] = None
    neighborhood: Optional[str] = None
    city_state: Optional[str] = None
    total_amount: Decimal
    created_at: datetime
    items: List[InvoiceLineRecordDTO] = Field(default_factory=list)
