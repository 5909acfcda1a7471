"""Document Renderer Interface

Defines the contract for turning invoice data into document markup.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.app.use_cases.invoicing.dtos import InvoiceDataDTO


class DocumentRenderer(ABC):
    """
    Service interface for invoice markup rendering

    Implementations are pure apart from the clock and the protocol number
    generator they are constructed with, and are safe to share between
    concurrent requests.
    """

    @abstractmethod
    def render(self, invoice: "InvoiceDataDTO") -> str:
        """
        Render the fiscal document markup for an invoice

        Args:
            invoice: Invoice data in transmission form

        Returns:
            Complete HTML document as a string
        """
        pass
