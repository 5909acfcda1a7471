"""Mapping between the transmission and the persisted form of an invoice"""

from decimal import Decimal, InvalidOperation, localcontext
from typing import Union

from src.domain.invoice import Invoice
from src.domain.invoice_line import InvoiceLine
from .dtos import InvoiceDataDTO, LineItemDTO


def parse_amount(text: str) -> Decimal:
    """Decimal text to Decimal; InvalidOperation for malformed or non-finite text"""
    value = Decimal(text)
    if not value.is_finite():
        raise InvalidOperation(f"{text!r} is not a finite amount")
    return value


def format_decimal(value: Union[Decimal, str, int], min_places: int = 0) -> str:
    """
    Format a decimal as plain text without losing any significant digit

    Trailing zeros beyond ``min_places`` are dropped, never rounded:
    ``Decimal("150.000000")`` -> ``"150.00"`` with min_places=2,
    ``Decimal("1.000000")`` -> ``"1"`` with min_places=0.
    NaN and infinities are returned as their plain text.
    """
    value = Decimal(value)
    if not value.is_finite():
        return str(value)
    digits, exponent = value.as_tuple()[1:]
    with localcontext() as ctx:
        # Room for every digit, so neither step below can round
        ctx.prec = max(ctx.prec, len(digits) + max(exponent, 0) + min_places + 2)
        significant = -value.normalize().as_tuple().exponent
        places = max(min_places, significant)
        return str(value.quantize(Decimal(1).scaleb(-places)))


def format_amount(value: Union[Decimal, str, int]) -> str:
    return format_decimal(value, min_places=2)


def format_quantity(value: Union[Decimal, str, int]) -> str:
    return format_decimal(value, min_places=0)


class RecordMapper:
    """
    Stateless converter between InvoiceDataDTO and the Invoice entity

    to_record raises decimal.InvalidOperation for amounts that are not
    finite decimal text; to_data is total over stored records.
    """

    @staticmethod
    def to_record(data: InvoiceDataDTO) -> Invoice:
        invoice = Invoice(
            customer_name=data.customer_name,
            tax_id=data.tax_id,
            full_address=data.full_address,
            neighborhood=data.neighborhood,
            city_state=data.city_state,
            total_amount=parse_amount(data.total_amount),
        )
        invoice.items = [
            InvoiceLine(
                position=position,
                code=item.code,
                description=item.description,
                quantity=parse_amount(item.quantity),
                unit_price=parse_amount(item.unit_price),
                line_total=parse_amount(item.line_total),
            )
            for position, item in enumerate(data.items or [])
        ]
        return invoice

    @staticmethod
    def to_data(record: Invoice) -> InvoiceDataDTO:
        items = sorted(record.items or [], key=lambda line: line.position)
        return InvoiceDataDTO(
            customer_name=record.customer_name,
            tax_id=record.tax_id,
            full_address=record.full_address,
            neighborhood=record.neighborhood,
            city_state=record.city_state,
            total_amount=format_amount(record.total_amount),
            items=[
                LineItemDTO(
                    code=line.code,
                    description=line.description,
                    quantity=format_quantity(line.quantity),
                    unit_price=format_amount(line.unit_price),
                    line_total=format_amount(line.line_total),
                )
                for line in items
            ],
        )
