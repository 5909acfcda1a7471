"""PDF Conversion Service Interface

Defines the contract for rasterizing markup into a PDF document.
"""

from abc import ABC, abstractmethod
from libs.result import Result


class PdfConverter(ABC):
    """
    Service interface for HTML to PDF conversion

    Knows nothing about invoices. A single attempt is made per call.
    """

    @abstractmethod
    async def convert(self, markup: str) -> Result[bytes]:
        """
        Convert an HTML document to PDF

        Args:
            markup: Complete HTML document

        Returns:
            Result[bytes]: PDF bytes, or PDF_CONVERSION_FAILED
        """
        pass
