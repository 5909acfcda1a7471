"""Reconciliation of an invoice total against its line items

Callers send both the invoice total and the line totals. Nothing forces the
two to agree, so emission applies one of three explicit policies.
"""

import logging
from decimal import Decimal, InvalidOperation
from enum import Enum
from libs.result import Result, Return, Error
from .dtos import InvoiceDataDTO
from .mapper import format_amount, parse_amount

logger = logging.getLogger(__name__)


class TotalPolicy(str, Enum):
    """How a mismatch between total_amount and sum(line_total) is handled"""
    WARN = "warn"            # Log the mismatch and keep the caller's total
    REJECT = "reject"        # Refuse to emit the invoice
    RECOMPUTE = "recompute"  # Replace the total with the sum of line totals


def reconcile_total(data: InvoiceDataDTO, policy: TotalPolicy) -> Result[InvoiceDataDTO]:
    """
    Apply a TotalPolicy to invoice data

    Args:
        data: Invoice in transmission form
        policy: Policy to apply

    Returns:
        Result[InvoiceDataDTO]: Data to emit (possibly with a recomputed
        total), or INVOICE_TOTAL_MISMATCH
    """
    try:
        declared = parse_amount(data.total_amount)
        computed = sum((parse_amount(item.line_total) for item in data.items), Decimal("0"))
    except InvalidOperation:
        if policy == TotalPolicy.WARN:
            logger.warning(
                f"Cannot reconcile total for '{data.customer_name}': amounts are not decimal text"
            )
            return Return.ok(data)
        return Return.err(
            Error(
                code="INVOICE_TOTAL_MISMATCH",
                message="Invoice amounts must be decimal numbers",
                reason=f"total_amount={data.total_amount!r}",
            )
        )

    if declared == computed:
        return Return.ok(data)

    if policy == TotalPolicy.REJECT:
        return Return.err(
            Error(
                code="INVOICE_TOTAL_MISMATCH",
                message=f"Invoice total {data.total_amount} does not match "
                        f"the sum of line totals {format_amount(computed)}",
                reason="Total reconciliation policy is 'reject'",
            )
        )

    if policy == TotalPolicy.RECOMPUTE:
        logger.info(
            f"Recomputing total for '{data.customer_name}': "
            f"{data.total_amount} -> {format_amount(computed)}"
        )
        return Return.ok(data.model_copy(update={"total_amount": format_amount(computed)}))

    logger.warning(
        f"Invoice total {data.total_amount} for '{data.customer_name}' does not match "
        f"the sum of line totals {format_amount(computed)}"
    )
    return Return.ok(data)
