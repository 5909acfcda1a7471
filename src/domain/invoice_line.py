"""Invoice Line Domain Entity

Tracks individual line items within an invoice.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from sqlmodel import Field, Column, Index, Relationship
from sqlalchemy import ForeignKey, Integer, String
from src.domain.base import BaseModel, ExactDecimal, IdType

if TYPE_CHECKING:
    from src.domain.invoice import Invoice


class InvoiceLine(BaseModel, table=True):
    """
    Invoice Line - Individual billable row within an invoice

    Domain Rules:
    - Each line item belongs to exactly one invoice
    - position preserves the order in which items were sent
    - Immutable once persisted
    """

    __tablename__ = "invoice_lines"
    __table_args__ = (
        Index('ix_invoice_lines_invoice_id', 'invoice_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique invoice line identifier (auto-increment)"
    )

    invoice_id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    position: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, default=0),
        description="Zero-based row order within the invoice"
    )

    code: str = Field(
        sa_column=Column(String(60), nullable=False),
        description="Product / service code"
    )

    description: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Line item description (e.g., 'Consulta')"
    )

    quantity: Decimal = Field(
        sa_column=Column(ExactDecimal(), nullable=False),
        description="Quantity"
    )

    unit_price: Decimal = Field(
        sa_column=Column(ExactDecimal(), nullable=False),
        description="Price per unit (precision: 18,6)"
    )

    line_total: Decimal = Field(
        sa_column=Column(ExactDecimal(), nullable=False),
        description="Total for the line"
    )

    invoice: Optional["Invoice"] = Relationship(back_populates="items")

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "invoice_id": 1,
                "position": 0,
                "code": "C1",
                "description": "Consulta",
                "quantity": "1.000000",
                "unit_price": "150.000000",
                "line_total": "150.000000"
            }
        }
