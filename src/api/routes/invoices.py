"""Invoice API Routes

FastAPI routes for emitting, listing and re-downloading invoices (NF-e).
"""

import unicodedata
from typing import List
from urllib.parse import quote
from fastapi import APIRouter, Depends, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.invoice_request import EmitInvoiceRequestSchema
from src.app.services.document_renderer import DocumentRenderer
from src.app.services.pdf_converter import PdfConverter
from src.app.use_cases.invoicing.dtos import (
    InvoiceDataDTO,
    InvoiceDocumentDTO,
    InvoiceRecordDTO,
    LineItemDTO,
)
from src.app.use_cases.invoicing.emit_invoice import EmitInvoice
from src.app.use_cases.invoicing.list_invoice_history import ListInvoiceHistory
from src.app.use_cases.invoicing.redownload_invoice import RedownloadInvoice
from src.app.use_cases.invoicing.totals import TotalPolicy
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, get_pdf_converter, get_document_renderer, get_total_policy
from src.api.error import ClientError

router = APIRouter(prefix="/nfe", tags=["Invoices"])

PDF_RESPONSE = {
    200: {
        "content": {"application/pdf": {}},
        "description": "PDF document"
    }
}

CONVERSION_FAILED_RESPONSE = {
    500: {
        "description": "PDF conversion failed",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "PDF_CONVERSION_FAILED",
                        "message": "Failed to generate the invoice PDF"
                    }
                }
            }
        }
    }
}

ERROR_STATUS = {
    "INVOICE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVOICE_TOTAL_MISMATCH": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "PDF_CONVERSION_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "LIST_INVOICES_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback and the UTF-8 name (RFC 6266)"""
    fallback = (
        unicodedata.normalize("NFKD", filename)
        .encode("ascii", "ignore")
        .decode("ascii")
        .replace('"', "")
        .replace("\\", "")
    )
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


def pdf_response(document: InvoiceDocumentDTO) -> Response:
    headers = {"Content-Disposition": content_disposition(document.filename)}
    if document.invoice_id is not None:
        headers["X-Invoice-Id"] = str(document.invoice_id)
    return Response(content=document.content, media_type="application/pdf", headers=headers)


def raise_for_error(result) -> None:
    if result.is_err():
        raise ClientError(
            result.error,
            status_code=ERROR_STATUS.get(result.error.code, status.HTTP_400_BAD_REQUEST),
        )


@router.get(
    "",
    response_model=List[InvoiceRecordDTO],
    status_code=status.HTTP_200_OK,
)
async def list_invoice_history(session: AsyncSession = Depends(get_session)):
    """
    List every emitted invoice with its line items, oldest first.

    **Returns:**
    - 200: Invoice records (full persisted form)
    """
    use_case = ListInvoiceHistory(SqlAlchemyInvoiceRepository(session))
    result = await use_case.execute()
    raise_for_error(result)
    return result.value


@router.post(
    "/emit",
    responses={
        **PDF_RESPONSE,
        **CONVERSION_FAILED_RESPONSE,
        422: {
            "description": "Invalid request or total does not match line items",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVOICE_TOTAL_MISMATCH",
                            "message": "Invoice total 100.00 does not match the sum of line totals 150.00"
                        }
                    }
                }
            }
        }
    }
)
async def emit_invoice(
    request: EmitInvoiceRequestSchema,
    session: AsyncSession = Depends(get_session),
    renderer: DocumentRenderer = Depends(get_document_renderer),
    converter: PdfConverter = Depends(get_pdf_converter),
    total_policy: TotalPolicy = Depends(get_total_policy),
):
    """
    Emit a new invoice PDF (simulated NF-e, no fiscal value).

    The invoice is saved to the history on a best-effort basis: if saving
    fails the PDF is still returned, without the `X-Invoice-Id` header.

    **Example request:**
    ```json
    {
      "customer_name": "Maria Silva",
      "total_amount": "150.00",
      "items": [
        {"code": "C1", "description": "Consulta", "quantity": "1",
         "unit_price": "150.00", "line_total": "150.00"}
      ]
    }
    ```

    **Returns:**
    - 200: PDF file, named `nota_fiscal_<customer_name>.pdf`
    - 422: Validation error or total mismatch (policy `reject`)
    - 500: PDF conversion failed
    """
    # Create UnitOfWork and repositories
    uow = SqlAlchemyUnitOfWork(session)
    invoice_repo = SqlAlchemyInvoiceRepository(session)

    # Convert request schema to invoice data
    data = InvoiceDataDTO(
        customer_name=request.customer_name,
        tax_id=request.tax_id,
        full_address=request.full_address,
        neighborhood=request.neighborhood,
        city_state=request.city_state,
        total_amount=request.total_amount,
        items=[
            LineItemDTO(
                code=item.code,
                description=item.description,
                quantity=item.quantity,
                unit_price=item.unit_price,
                line_total=item.line_total,
            )
            for item in request.items or []
        ],
    )

    # Execute use case
    use_case = EmitInvoice(uow, invoice_repo, renderer, converter, total_policy=total_policy)
    result = await use_case.execute(data)

    raise_for_error(result)
    return pdf_response(result.value)


@router.get(
    "/{invoice_id}/pdf",
    responses={
        **PDF_RESPONSE,
        **CONVERSION_FAILED_RESPONSE,
        404: {
            "description": "Invoice not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVOICE_NOT_FOUND",
                            "message": "Invoice with ID 123 not found"
                        }
                    }
                }
            }
        }
    }
)
async def redownload_invoice(
    invoice_id: int,
    session: AsyncSession = Depends(get_session),
    renderer: DocumentRenderer = Depends(get_document_renderer),
    converter: PdfConverter = Depends(get_pdf_converter),
):
    """
    Download a stored invoice again.

    The document is rendered afresh: customer and line items are identical,
    the emission date and protocol number are new.

    **Path parameters:**
    - `invoice_id` (required): Invoice ID

    **Returns:**
    - 200: PDF file, named `nota_<invoice_id>.pdf`
    - 404: Invoice not found
    - 500: PDF conversion failed
    """
    invoice_repo = SqlAlchemyInvoiceRepository(session)

    use_case = RedownloadInvoice(invoice_repo, renderer, converter)
    result = await use_case.execute(invoice_id)

    raise_for_error(result)
    return pdf_response(result.value)
