"""
List Invoice History Use Case

Retrieves every stored invoice with its line items.
"""
from typing import List
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from .dtos import InvoiceRecordDTO, InvoiceLineRecordDTO


class ListInvoiceHistory:
    """
    Use case: View invoice history

    Invoices are ordered by ID ascending (insertion order). No pagination.
    """

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(self) -> Result[List[InvoiceRecordDTO]]:
        try:
            invoices = await self.invoice_repo.list_all()
        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_INVOICES_FAILED",
                    message="Failed to load invoice history",
                    reason=str(e),
                )
            )

        return Return.ok(
            [
                InvoiceRecordDTO(
                    id=invoice.id,
                    customer_name=invoice.customer_name,
                    tax_id=invoice.tax_id,
                    full_address=invoice.full_address,
                    neighborhood=invoice.neighborhood,
                    city_state=invoice.city_state,
                    total_amount=invoice.total_amount,
                    created_at=invoice.created_at,
                    items=[
                        InvoiceLineRecordDTO(
                            id=line.id,
                            position=line.position,
                            code=line.code,
                            description=line.description,
                            quantity=line.quantity,
                            unit_price=line.unit_price,
                            line_total=line.line_total,
                        )
                        for line in sorted(invoice.items or [], key=lambda line: line.position)
                    ],
                )
                for invoice in invoices
            ]
        )
