"""Jinja2 Document Renderer Implementation

Renders the DANFE-style fiscal document (simulation, no fiscal value).
"""

import os
import time
from datetime import date
from typing import Callable, Optional
from jinja2 import Environment, FileSystemLoader, select_autoescape
from src.app.services.document_renderer import DocumentRenderer
from src.app.use_cases.invoicing.dtos import InvoiceDataDTO

TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")
TEMPLATE_NAME = "nfe_danfe.html"

# Simulated 44-digit access key; the document is never a real fiscal document
ACCESS_KEY_PLACEHOLDER = "3523 1200 0000 0000 0000 5500 1000 0000 0112 3456 7890"
PROTOCOL_PREFIX = "1352300000"
UNIT_LABEL = "UN"


def millisecond_protocol() -> str:
    """Display-only protocol number: fixed prefix + epoch milliseconds"""
    return f"{PROTOCOL_PREFIX}{int(time.time() * 1000)}"


def _blank_none(value):
    return "" if value is None else value


class JinjaDocumentRenderer(DocumentRenderer):
    """
    DocumentRenderer backed by a Jinja2 HTML template

    All interpolated values are HTML-escaped. Missing optional fields render
    as empty text. Numbers are interpolated as given, never validated.
    """

    def __init__(
        self,
        issuer_name: str = "HEALTHMONEY CLÍNICA",
        issuer_address: str = "Av. da Universidade, 123 - Campinas - SP",
        today: Callable[[], date] = date.today,
        protocol_generator: Callable[[], str] = millisecond_protocol,
        template_dir: Optional[str] = None,
    ):
        """
        Initialize renderer

        Args:
            issuer_name: Issuer shown in the document header
            issuer_address: Issuer address shown in the document header
            today: Clock providing the emission date
            protocol_generator: Source of the display-only protocol number
            template_dir: Directory holding nfe_danfe.html (defaults to the
                bundled template)
        """
        self.issuer_name = issuer_name
        self.issuer_address = issuer_address
        self.today = today
        self.protocol_generator = protocol_generator
        self.env = Environment(
            loader=FileSystemLoader(template_dir or TEMPLATE_DIR),
            autoescape=select_autoescape(["html"]),
            finalize=_blank_none,
        )

    def render(self, invoice: InvoiceDataDTO) -> str:
        """
        Render the fiscal document markup for an invoice

        Args:
            invoice: Invoice data in transmission form

        Returns:
            Complete HTML document
        """
        template = self.env.get_template(TEMPLATE_NAME)
        return template.render(
            invoice=invoice,
            items=invoice.items or [],
            unit_label=UNIT_LABEL,
            issuer_name=self.issuer_name,
            issuer_address=self.issuer_address,
            access_key=ACCESS_KEY_PLACEHOLDER,
            emission_date=self.today().isoformat(),
            protocol=self.protocol_generator(),
        )
