"""EmitInvoice Use Case

Emits a new fiscal document PDF and records it in the invoice history.
"""

import logging
from libs.best_effort import best_effort
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.document_renderer import DocumentRenderer
from src.app.services.pdf_converter import PdfConverter
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import Invoice
from .document import render_and_convert, emission_filename
from .dtos import InvoiceDataDTO, InvoiceDocumentDTO
from .mapper import RecordMapper
from .totals import TotalPolicy, reconcile_total

logger = logging.getLogger(__name__)


class EmitInvoice:
    """
    Use Case: Emit a new invoice PDF

    Business Rules:
    1. The total is reconciled against the line items per TotalPolicy
    2. History persistence is best effort: a failing store never blocks
       the PDF
    3. Every emission renders and converts afresh (no caching)
    4. Conversion failure is the only failure after reconciliation

    Flow:
    1. Reconcile total
    2. Persist record (best effort, rolled back on failure)
    3. Render markup
    4. Convert to PDF
    5. Return PDF with a filename derived from the customer name
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        renderer: DocumentRenderer,
        converter: PdfConverter,
        total_policy: TotalPolicy = TotalPolicy.WARN,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.renderer = renderer
        self.converter = converter
        self.total_policy = total_policy

    async def execute(self, data: InvoiceDataDTO) -> Result[InvoiceDocumentDTO]:
        """
        Execute invoice emission

        Args:
            data: Invoice in transmission form

        Returns:
            Result[InvoiceDocumentDTO]: PDF and filename, or
            INVOICE_TOTAL_MISMATCH / PDF_CONVERSION_FAILED
        """
        # Step 1: Reconcile total
        reconciled = reconcile_total(data, self.total_policy)
        if reconciled.is_err():
            return reconciled
        data = reconciled.value

        # Step 2: Persist history record
        persisted = await best_effort(
            self._persist(data),
            f"Saving invoice history for '{data.customer_name}'",
            log=logger,
        )
        invoice_id = persisted.value.id if persisted.is_ok() else None

        # Step 3 + 4: Render and convert
        pdf = await render_and_convert(self.renderer, self.converter, data)
        if pdf.is_err():
            logger.error(
                f"Invoice emission for '{data.customer_name}' failed: {pdf.error.reason}"
            )
            return Return.err(
                Error(
                    code="PDF_CONVERSION_FAILED",
                    message="Failed to generate the invoice PDF",
                    reason=pdf.error.reason,
                )
            )

        # Step 5: Build response
        return Return.ok(
            InvoiceDocumentDTO(
                filename=emission_filename(data.customer_name),
                content=pdf.value,
                invoice_id=invoice_id,
            )
        )

    async def _persist(self, data: InvoiceDataDTO) -> Invoice:
        try:
            created = await self.invoice_repo.create(RecordMapper.to_record(data))
            await self.uow.commit()
        except Exception:
            await self.uow.rollback()
            raise
        return created
