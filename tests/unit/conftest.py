import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoicing.dtos import InvoiceDataDTO, LineItemDTO


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def sample_invoice_data():
    """Invoice from the reference example: one consultation for Maria Silva"""
    return InvoiceDataDTO(
        customer_name="Maria Silva",
        tax_id="123.456.789-00",
        full_address="Rua das Flores, 10",
        neighborhood="Centro",
        city_state="Campinas/SP",
        total_amount="150.00",
        items=[
            LineItemDTO(
                code="C1",
                description="Consulta",
                quantity="1",
                unit_price="150.00",
                line_total="150.00",
            )
        ],
    )


@pytest.fixture
def multi_item_invoice_data():
    """Invoice with three items in a deliberate, non-alphabetical order"""
    return InvoiceDataDTO(
        customer_name="Clínica Bem Estar Ltda",
        tax_id="12.345.678/0001-90",
        full_address="Av. Brasil, 500",
        neighborhood="Jardim América",
        city_state="São Paulo/SP",
        total_amount="382.50",
        items=[
            LineItemDTO(code="Z9", description="Retorno", quantity="1", unit_price="80.00", line_total="80.00"),
            LineItemDTO(code="A1", description="Exame", quantity="2.5", unit_price="45.00", line_total="112.50"),
            LineItemDTO(code="M5", description="Consulta", quantity="1", unit_price="190.00", line_total="190.00"),
        ],
    )


@pytest.fixture
def sample_pdf_bytes():
    """Sample PDF bytes for testing"""
    return b"%PDF-1.4\nTest PDF content"


@pytest.fixture
def total_of():
    def _total(data: InvoiceDataDTO) -> Decimal:
        return sum((Decimal(item.line_total) for item in data.items), Decimal("0"))
    return _total
