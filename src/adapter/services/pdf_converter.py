"""HTTP PDF Conversion Service Implementation

Sends rendered markup to an external HTML -> PDF API (PDFShift compatible).
"""

import logging
from typing import Optional
import httpx
from libs.result import Result, Return, Error
from src.app.services.pdf_converter import PdfConverter

logger = logging.getLogger(__name__)


class HttpPdfConverter(PdfConverter):
    """
    PdfConverter backed by a remote conversion API

    Request: POST JSON {"source", "landscape": false, "use_print": false}
    with the service credential in the x-api-key header.
    Response: the PDF as the raw body. Single attempt, no retries.
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize conversion client

        Args:
            url: Conversion endpoint
            api_key: Service credential sent as x-api-key
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests)
        """
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    async def convert(self, markup: str) -> Result[bytes]:
        """
        Convert an HTML document to PDF

        Args:
            markup: Complete HTML document

        Returns:
            Result[bytes]: PDF bytes as returned by the service, or
            PDF_CONVERSION_FAILED
        """
        payload = {
            "source": markup,
            "landscape": False,
            "use_print": False,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.url,
                    json=payload,
                    headers={"x-api-key": self.api_key},
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"PDF conversion rejected with HTTP {e.response.status_code}: {e.response.text[:500]}"
            )
            return self._failure(f"HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            logger.error(f"PDF conversion request to {self.url} failed: {e!r}")
            return self._failure(f"{type(e).__name__}: {e}")

        if not response.content:
            logger.error("PDF conversion returned an empty body")
            return self._failure("Empty response body")

        logger.info(f"PDF conversion succeeded ({len(response.content)} bytes)")
        return Return.ok(response.content)

    @staticmethod
    def _failure(reason: str) -> Result[bytes]:
        return Return.err(
            Error(
                code="PDF_CONVERSION_FAILED",
                message="PDF conversion service failed",
                reason=reason,
            )
        )
