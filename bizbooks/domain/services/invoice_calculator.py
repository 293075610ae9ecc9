# bizbooks/domain/services/invoice_calculator.py
"""
GST invoice calculator.

Derives the taxable amount and the tax breakdown of an invoice line from the
raw form inputs (rate, quantity, GST rate, extra charges, extra deductions).

The calculator is forgiving: anything that is not a finite, non-negative number
(``None``, ``""``, ``"abc"``, ``NaN``, ``-5``) is read as zero. It never raises
for bad input; required-field checks belong to the caller.

GST is always split evenly into CGST + SGST. IGST is carried as a field but is
never non-zero here.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

logger = logging.getLogger("invoice_calculator")

ZERO = Decimal("0")
TWO_HUNDRED = Decimal("200")


# ---------------------------------------------------------------------------
# Result dataclass
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InvoiceTotals:
    """Computed totals for one invoice line. Never mutated after creation."""
    taxable_amount: Decimal = ZERO
    cgst_amount: Decimal = ZERO
    sgst_amount: Decimal = ZERO
    igst_amount: Decimal = ZERO
    grand_total: Decimal = ZERO

    @property
    def tax_amount(self) -> Decimal:
        return self.cgst_amount + self.sgst_amount + self.igst_amount

    def as_dict(self) -> dict[str, Decimal]:
        """Snapshot fields as stored on an invoice record."""
        data = asdict(self)
        data["total_amount"] = data.pop("taxable_amount")
        return data


# ---------------------------------------------------------------------------
# Input normalisation
# ---------------------------------------------------------------------------

def to_amount(value: Any) -> Decimal:
    """
    Read a form value as a non-negative Decimal, falling back to zero.

    Floats go through ``str`` so ``88.9`` becomes ``Decimal("88.9")`` rather
    than its binary expansion.
    """
    if value is None or isinstance(value, bool):
        return ZERO

    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, TypeError, ValueError):
            return ZERO

    if not amount.is_finite() or amount < ZERO:
        return ZERO
    return amount


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def compute_totals(
    rate: Any,
    quantity: Any,
    gst_rate_percent: Any,
    extra_charges: Any = 0,
    extra_deductions: Any = 0,
) -> InvoiceTotals:
    """
    Compute the tax breakdown and grand total of an invoice line.

        taxable  = rate * quantity + extra_charges - extra_deductions
        cgst     = sgst = taxable * gst_rate_percent / 200
        igst     = 0
        grand    = taxable + cgst + sgst + igst

    The taxable amount is not clamped: deductions larger than the base give a
    negative taxable amount, and the tax components follow it below zero.
    """
    rate = to_amount(rate)
    quantity = to_amount(quantity)
    gst_rate = to_amount(gst_rate_percent)
    charges = to_amount(extra_charges)
    deductions = to_amount(extra_deductions)

    taxable = rate * quantity + charges - deductions

    # TODO: bill IGST instead of CGST + SGST when firm and client states differ
    cgst = sgst = ZERO
    igst = ZERO
    if gst_rate > ZERO:
        cgst = taxable * gst_rate / TWO_HUNDRED
        sgst = taxable * gst_rate / TWO_HUNDRED

    totals = InvoiceTotals(
        taxable_amount=taxable,
        cgst_amount=cgst,
        sgst_amount=sgst,
        igst_amount=igst,
        grand_total=taxable + cgst + sgst + igst,
    )
    logger.debug(
        "compute_totals rate=%s qty=%s gst=%s -> grand_total=%s",
        rate, quantity, gst_rate, totals.grand_total,
    )
    return totals
