"""Invoice Domain Entity

Durable form of an emitted fiscal document (nota fiscal).
"""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional
from sqlmodel import Field, Column, Relationship
from sqlalchemy import DateTime, String
from src.domain.base import BaseModel, ExactDecimal, IdType, utcnow

if TYPE_CHECKING:
    from src.domain.invoice_line import InvoiceLine


class Invoice(BaseModel, table=True):
    """
    Invoice - Persisted record of an emitted invoice

    Domain Rules:
    - id is assigned by the database on insert and never changes
    - The invoice exclusively owns its line items; deleting it deletes them
    - Records are immutable once created (no update operation)
    - total_amount is stored as sent; see TotalPolicy for reconciliation
    """

    __tablename__ = "invoices"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique invoice identifier (auto-increment)"
    )

    customer_name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Customer name / company name"
    )

    tax_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(32), nullable=True),
        description="Customer CPF / CNPJ"
    )

    full_address: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Street address"
    )

    neighborhood: Optional[str] = Field(
        default=None,
        sa_column=Column(String(120), nullable=True),
        description="Neighborhood / district"
    )

    city_state: Optional[str] = Field(
        default=None,
        sa_column=Column(String(120), nullable=True),
        description="City and state (e.g., Campinas/SP)"
    )

    total_amount: Decimal = Field(
        sa_column=Column(ExactDecimal(), nullable=False),
        description="Invoice total (precision: 18,6)"
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Record creation timestamp (UTC)"
    )

    items: List["InvoiceLine"] = Relationship(
        back_populates="invoice",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "InvoiceLine.position",
            "lazy": "selectin",
        },
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "customer_name": "Maria Silva",
                "tax_id": "123.456.789-00",
                "full_address": "Rua das Flores, 10",
                "neighborhood": "Centro",
                "city_state": "Campinas/SP",
                "total_amount": "150.000000",
                "created_at": "2024-01-31T00:00:00Z"
            }
        }
