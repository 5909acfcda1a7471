"""RedownloadInvoice Use Case

Re-issues the PDF of a stored invoice.
"""

from libs.result import Result, Return, Error
from src.app.services.document_renderer import DocumentRenderer
from src.app.services.pdf_converter import PdfConverter
from src.app.repositories.invoice_repository import InvoiceRepository
from .document import render_and_convert, redownload_filename
from .dtos import InvoiceDocumentDTO
from .mapper import RecordMapper


class RedownloadInvoice:
    """
    Use Case: Download a stored invoice again

    Business Rules:
    1. Invoice must exist; otherwise nothing is rendered or converted
    2. The document is rendered afresh from the stored data, so its
       emission date and protocol number differ from the original PDF

    Flow:
    1. Retrieve invoice by ID
    2. Map record back to transmission form
    3. Render and convert
    4. Return PDF named after the invoice ID
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        renderer: DocumentRenderer,
        converter: PdfConverter,
    ):
        self.invoice_repo = invoice_repo
        self.renderer = renderer
        self.converter = converter

    async def execute(self, invoice_id: int) -> Result[InvoiceDocumentDTO]:
        """
        Execute invoice re-download

        Args:
            invoice_id: Stored invoice ID

        Returns:
            Result[InvoiceDocumentDTO]: PDF and filename, or
            INVOICE_NOT_FOUND / PDF_CONVERSION_FAILED
        """
        # Step 1: Retrieve invoice
        invoice = await self.invoice_repo.get_by_id(invoice_id)

        if not invoice:
            return Return.err(
                Error(
                    code="INVOICE_NOT_FOUND",
                    message=f"Invoice with ID {invoice_id} not found",
                    reason="Invoice does not exist",
                )
            )

        # Step 2: Rebuild transmission form
        data = RecordMapper.to_data(invoice)

        # Step 3: Render and convert
        pdf = await render_and_convert(self.renderer, self.converter, data)
        if pdf.is_err():
            return Return.err(
                Error(
                    code="PDF_CONVERSION_FAILED",
                    message=f"Failed to generate the PDF of invoice {invoice_id}",
                    reason=pdf.error.reason,
                )
            )

        # Step 4: Build response
        return Return.ok(
            InvoiceDocumentDTO(
                filename=redownload_filename(invoice_id),
                content=pdf.value,
                invoice_id=invoice_id,
            )
        )
