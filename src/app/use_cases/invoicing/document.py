"""Render + convert step shared by emission and re-download"""

from libs.result import Result
from src.app.services.document_renderer import DocumentRenderer
from src.app.services.pdf_converter import PdfConverter
from .dtos import InvoiceDataDTO


async def render_and_convert(
    renderer: DocumentRenderer,
    converter: PdfConverter,
    data: InvoiceDataDTO,
) -> Result[bytes]:
    """
    Render the invoice markup and convert it to PDF

    Every call renders afresh, so generated fields (emission date, protocol
    number) differ between calls for the same data.
    """
    markup = renderer.render(data)
    return await converter.convert(markup)


def emission_filename(customer_name: str) -> str:
    return f"nota_fiscal_{customer_name.replace(' ', '_')}.pdf"


def redownload_filename(invoice_id: int) -> str:
    return f"nota_{invoice_id}.pdf"
