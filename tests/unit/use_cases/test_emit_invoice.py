"""Unit tests for EmitInvoice use case

Tests cover:
- Successful emission with history record
- Persistence failure does not block the PDF
- Conversion failure
- Total reconciliation policies
"""

import logging
import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from libs.result import Return, Error
from src.app.use_cases.invoicing.emit_invoice import EmitInvoice
from src.app.use_cases.invoicing.totals import TotalPolicy


@pytest.fixture
def mock_invoice_repo():
    """Mock invoice repository assigning ID 1 on create"""
    repo = MagicMock()

    async def create(invoice):
        invoice.id = 1
        return invoice

    repo.create = AsyncMock(side_effect=create)
    return repo


@pytest.fixture
def mock_renderer():
    """Mock document renderer"""
    renderer = MagicMock()
    renderer.render = MagicMock(return_value="<html>nota</html>")
    return renderer


@pytest.fixture
def mock_converter(sample_pdf_bytes):
    """Mock PDF converter returning fixed bytes"""
    converter = MagicMock()
    converter.convert = AsyncMock(return_value=Return.ok(sample_pdf_bytes))
    return converter


@pytest.fixture
def emit_invoice_use_case(mock_uow, mock_invoice_repo, mock_renderer, mock_converter):
    """EmitInvoice use case instance with mocked dependencies"""
    return EmitInvoice(
        uow=mock_uow,
        invoice_repo=mock_invoice_repo,
        renderer=mock_renderer,
        converter=mock_converter,
    )


@pytest.mark.asyncio
class TestEmitInvoiceSuccess:
    """Test successful invoice emission"""

    async def test_emit_returns_pdf_named_after_customer(
        self,
        emit_invoice_use_case,
        mock_uow,
        mock_invoice_repo,
        mock_renderer,
        mock_converter,
        sample_invoice_data,
        sample_pdf_bytes,
    ):
        """
        Given: Valid invoice data for Maria Silva
        When: emit is executed
        Then: Record is stored, markup is converted and the PDF is returned
        """
        # Act
        result = await emit_invoice_use_case.execute(sample_invoice_data)

        # Assert
        assert result.is_ok()
        document = result.value
        assert document.content == sample_pdf_bytes
        assert document.filename == "nota_fiscal_Maria_Silva.pdf"
        assert document.invoice_id == 1

        # Verify history record
        mock_invoice_repo.create.assert_awaited_once()
        record = mock_invoice_repo.create.await_args.args[0]
        assert record.customer_name == "Maria Silva"
        assert record.total_amount == Decimal("150.00")
        assert [line.code for line in record.items] == ["C1"]
        mock_uow.commit.assert_awaited_once()
        mock_uow.rollback.assert_not_awaited()

        # Verify render + convert
        mock_renderer.render.assert_called_once_with(sample_invoice_data)
        mock_converter.convert.assert_awaited_once_with("<html>nota</html>")

    async def test_every_emission_renders_and_converts(
        self, emit_invoice_use_case, mock_renderer, mock_converter, sample_invoice_data
    ):
        """Identical payloads are not deduplicated"""
        await emit_invoice_use_case.execute(sample_invoice_data)
        await emit_invoice_use_case.execute(sample_invoice_data)

        assert mock_renderer.render.call_count == 2
        assert mock_converter.convert.await_count == 2


@pytest.mark.asyncio
class TestEmitInvoicePersistenceFailure:
    """History bookkeeping failures never block the PDF"""

    async def test_insert_failure_still_returns_pdf(
        self,
        emit_invoice_use_case,
        mock_uow,
        mock_invoice_repo,
        mock_converter,
        sample_invoice_data,
        sample_pdf_bytes,
        caplog,
    ):
        """
        Given: Store fails on insert
        When: emit is executed
        Then: Failure is logged, transaction rolled back, PDF returned
        """
        # Arrange
        mock_invoice_repo.create = AsyncMock(side_effect=RuntimeError("database is locked"))

        # Act
        with caplog.at_level(logging.ERROR):
            result = await emit_invoice_use_case.execute(sample_invoice_data)

        # Assert
        assert result.is_ok()
        assert result.value.content == sample_pdf_bytes
        assert result.value.invoice_id is None
        mock_uow.rollback.assert_awaited_once()
        mock_uow.commit.assert_not_awaited()
        mock_converter.convert.assert_awaited_once()
        assert "database is locked" in caplog.text

    async def test_commit_failure_still_returns_pdf(
        self, emit_invoice_use_case, mock_uow, sample_invoice_data, sample_pdf_bytes
    ):
        mock_uow.commit = AsyncMock(side_effect=RuntimeError("connection reset"))

        result = await emit_invoice_use_case.execute(sample_invoice_data)

        assert result.is_ok()
        assert result.value.content == sample_pdf_bytes
        assert result.value.invoice_id is None
        mock_uow.rollback.assert_awaited_once()

    async def test_unparsable_amount_is_rendered_but_not_stored(
        self,
        emit_invoice_use_case,
        mock_invoice_repo,
        mock_renderer,
        sample_invoice_data,
    ):
        """Amounts are only validated where they must become decimals"""
        data = sample_invoice_data.model_copy(update={"total_amount": "R$ 150,00"})

        result = await emit_invoice_use_case.execute(data)

        assert result.is_ok()
        assert result.value.invoice_id is None
        mock_invoice_repo.create.assert_not_awaited()
        mock_renderer.render.assert_called_once_with(data)


@pytest.mark.asyncio
class TestEmitInvoiceConversionFailure:

    async def test_conversion_failure_returns_error(
        self, emit_invoice_use_case, mock_converter, sample_invoice_data
    ):
        # Arrange
        mock_converter.convert = AsyncMock(
            return_value=Return.err(
                Error(code="PDF_CONVERSION_FAILED", message="PDF conversion service failed", reason="HTTP 502")
            )
        )

        # Act
        result = await emit_invoice_use_case.execute(sample_invoice_data)

        # Assert
        assert result.is_err()
        assert result.error.code == "PDF_CONVERSION_FAILED"
        assert result.error.reason == "HTTP 502"

    async def test_record_is_kept_when_conversion_fails(
        self, emit_invoice_use_case, mock_uow, mock_converter, sample_invoice_data
    ):
        """History is written before rendering"""
        mock_converter.convert = AsyncMock(
            return_value=Return.err(Error(code="PDF_CONVERSION_FAILED", message="failed"))
        )

        await emit_invoice_use_case.execute(sample_invoice_data)

        mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
class TestEmitInvoiceTotalPolicy:

    async def test_reject_policy_stops_before_any_side_effect(
        self, mock_uow, mock_invoice_repo, mock_renderer, mock_converter, sample_invoice_data
    ):
        # Arrange
        use_case = EmitInvoice(
            mock_uow, mock_invoice_repo, mock_renderer, mock_converter,
            total_policy=TotalPolicy.REJECT,
        )
        data = sample_invoice_data.model_copy(update={"total_amount": "10.00"})

        # Act
        result = await use_case.execute(data)

        # Assert
        assert result.is_err()
        assert result.error.code == "INVOICE_TOTAL_MISMATCH"
        mock_invoice_repo.create.assert_not_awaited()
        mock_renderer.render.assert_not_called()
        mock_converter.convert.assert_not_awaited()

    async def test_recompute_policy_stores_and_renders_the_sum(
        self, mock_uow, mock_invoice_repo, mock_renderer, mock_converter, multi_item_invoice_data
    ):
        # Arrange
        use_case = EmitInvoice(
            mock_uow, mock_invoice_repo, mock_renderer, mock_converter,
            total_policy=TotalPolicy.RECOMPUTE,
        )
        data = multi_item_invoice_data.model_copy(update={"total_amount": "0.01"})

        # Act
        result = await use_case.execute(data)

        # Assert
        assert result.is_ok()
        record = mock_invoice_repo.create.await_args.args[0]
        assert record.total_amount == Decimal("382.50")
        rendered = mock_renderer.render.call_args.args[0]
        assert rendered.total_amount == "382.50"

    async def test_warn_policy_keeps_declared_total(
        self, emit_invoice_use_case, mock_invoice_repo, sample_invoice_data
    ):
        data = sample_invoice_data.model_copy(update={"total_amount": "10.00"})

        result = await emit_invoice_use_case.execute(data)

        assert result.is_ok()
        record = mock_invoice_repo.create.await_args.args[0]
        assert record.total_amount == Decimal("10.00")


@pytest.mark.asyncio
class TestEmitInvoiceNonFiniteAmounts:
    """NaN and infinities never make emission raise"""

    @pytest.mark.parametrize("amount", ["NaN", "Infinity", "sNaN"])
    async def test_non_finite_line_total_still_emits_pdf(
        self,
        emit_invoice_use_case,
        mock_uow,
        mock_invoice_repo,
        mock_renderer,
        sample_invoice_data,
        sample_pdf_bytes,
        amount,
    ):
        """
        Given: A line total that parses as a non-finite Decimal
        When: emit is executed under the default policy
        Then: The PDF is returned with the amount as sent and no history record
        """
        # Arrange
        item = sample_invoice_data.items[0].model_copy(update={"line_total": amount})
        data = sample_invoice_data.model_copy(update={"items": [item]})

        # Act
        result = await emit_invoice_use_case.execute(data)

        # Assert
        assert result.is_ok()
        assert result.value.content == sample_pdf_bytes
        assert result.value.invoice_id is None
        mock_invoice_repo.create.assert_not_awaited()
        mock_uow.rollback.assert_awaited_once()
        mock_renderer.render.assert_called_once_with(data)
