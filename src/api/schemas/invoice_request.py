"""Request schemas for Invoice API

Pydantic models for validating incoming HTTP requests.
"""

from decimal import Decimal, InvalidOperation, localcontext
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


# Stored as NUMERIC(18, 6)
MAX_DECIMAL_PLACES = 6
MAX_INTEGER_DIGITS = 12


def _as_decimal_text(v):
    """Numbers sent as JSON numbers travel on as their decimal text"""
    if isinstance(v, bool):
        raise ValueError("Expected a number or decimal text")
    if isinstance(v, (int, Decimal)):
        v = str(v)
    elif isinstance(v, float):
        v = repr(v)
    if isinstance(v, str):
        _check_storable(v)
    return v


def _check_storable(text: str) -> None:
    """
    Reject amounts the invoice history cannot hold exactly

    Text that is not a finite decimal is left alone; it is printed on the
    document as sent.
    """
    try:
        amount = Decimal(text)
    except InvalidOperation:
        return
    if not amount.is_finite() or amount.is_zero():
        return
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(amount.as_tuple().digits))
        places = -amount.normalize().as_tuple().exponent
    if places > MAX_DECIMAL_PLACES:
        raise ValueError(f"At most {MAX_DECIMAL_PLACES} decimal places are supported")
    if amount.adjusted() >= MAX_INTEGER_DIGITS:
        raise ValueError(f"At most {MAX_INTEGER_DIGITS} integer digits are supported")


class LineItemRequestSchema(BaseModel):
    """One invoice line as sent by the client"""

    code: str = Field(..., description="Product / service code")
    description: str = Field(..., description="Line description")
    quantity: str = Field(..., description="Quantity (text or number)")
    unit_price: str = Field(..., description="Unit price as decimal text")
    line_total: str = Field(..., description="Line total as decimal text")

    @field_validator("quantity", "unit_price", "line_total", mode="before")
    @classmethod
    def normalize_amount(cls, v):
        return _as_decimal_text(v)


class EmitInvoiceRequestSchema(BaseModel):
    """
    Request schema for emitting an invoice

    Used for POST /nfe/emit endpoint.
    """

    customer_name: str = Field(
        ...,
        min_length=1,
        description="Customer name (required, non-empty)"
    )
    tax_id: Optional[str] = Field(default=None, description="CPF / CNPJ")
    full_address: Optional[str] = Field(default=None, description="Street address")
    neighborhood: Optional[str] = Field(default=None, description="Neighborhood / district")
    city_state: Optional[str] = Field(default=None, description="City / state")
    total_amount: str = Field(..., description="Invoice total as decimal text")
    items: Optional[List[LineItemRequestSchema]] = Field(
        default=None,
        description="Ordered line items"
    )

    @field_validator("total_amount", mode="before")
    @classmethod
    def normalize_total(cls, v):
        return _as_decimal_text(v)

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
                        "quantity": 1,
                        "unit_price": "150.00",
                        "line_total": "150.00"
                    }
                ]
            }
        }
