from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sqlalchemy import select

from bizbooks.domain.services.invoice_calculator import InvoiceTotals, compute_totals, to_amount
from bizbooks.infrastructure.db.models import Invoice
from bizbooks.infrastructure.db.repositories.base import RecordRepository

logger = logging.getLogger("record_store")

LINE_INPUTS = ("rate", "quantity", "gst_rate", "extra_charges", "extra_deductions")

# scale of the matching Invoice columns
INPUT_PLACES = {
    "rate": Decimal("0.01"),
    "quantity": Decimal("0.001"),
    "gst_rate": Decimal("0.01"),
    "extra_charges": Decimal("0.01"),
    "extra_deductions": Decimal("0.01"),
}


def payment_status_for(paid: Decimal, grand_total: Decimal) -> str:
    if paid <= 0:
        return "pending"
    if paid >= grand_total:
        return "paid"
    return "partial"


class InvoiceRepository(RecordRepository[Invoice]):
    model = Invoice

    # ---------- small helpers ----------

    @staticmethod
    def _totals_for(inputs: dict[str, Any]) -> InvoiceTotals:
        return compute_totals(
            inputs.get("rate"),
            inputs.get("quantity"),
            inputs.get("gst_rate"),
            inputs.get("extra_charges"),
            inputs.get("extra_deductions"),
        )

    @staticmethod
    def _normalised_inputs(inputs: dict[str, Any]) -> dict[str, Decimal]:
        """Line inputs as stored: blank/invalid -> 0, rounded to column scale."""
        return {
            name: to_amount(inputs.get(name)).quantize(INPUT_PLACES[name], rounding=ROUND_HALF_UP)
            for name in LINE_INPUTS
        }

    # ---------- main methods ----------

    async def list_for_firms(self, firm_ids: list[str] | None) -> list[Invoice]:
        """Invoices of the given firms (``None`` = every firm), newest first."""
        stmt = select(Invoice)
        if firm_ids is not None:
            stmt = stmt.where(Invoice.firm_id.in_(firm_ids))
        stmt = stmt.order_by(Invoice.created_at.desc())
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def create_from_inputs(self, **fields: Any) -> Invoice:
        """
        Create an invoice from raw form fields.

        The totals snapshot is always recomputed here; any totals passed in
        are ignored. A new invoice starts ``pending`` with nothing paid.
        """
        inputs = self._normalised_inputs(fields)
        totals = self._totals_for(inputs)
        details = {k: v for k, v in fields.items() if k not in LINE_INPUTS}

        return await self.create(
            **details,
            **inputs,
            **totals.as_dict(),
            payment_status="pending",
            paid_amount=Decimal("0"),
            pending_amount=totals.grand_total,
        )

    async def update_inputs(self, invoice: Invoice, **fields: Any) -> Invoice:
        """
        Apply edited fields and refresh the totals snapshot.

        The totals are only recomputed when a line input changed. Whatever
        was already paid stays paid; the outstanding amount is the new grand
        total minus that (never below zero), and the status follows.
        """
        details = {k: v for k, v in fields.items() if k not in LINE_INPUTS}
        if not any(name in fields for name in LINE_INPUTS):
            self._apply(invoice, details)
            await self._commit("update", invoice)
            logger.info("Updated invoice %s details %s", invoice.id, sorted(details))
            return invoice

        merged = {name: getattr(invoice, name) for name in LINE_INPUTS}
        merged.update({k: v for k, v in fields.items() if k in LINE_INPUTS})
        inputs = self._normalised_inputs(merged)
        totals = self._totals_for(inputs)

        paid = invoice.paid_amount or Decimal("0")
        self._apply(invoice, {**details, **inputs, **totals.as_dict()})
        invoice.pending_amount = max(totals.grand_total - paid, Decimal("0"))
        invoice.payment_status = payment_status_for(paid, totals.grand_total)

        await self._commit("update", invoice)
        logger.info("Updated invoice %s grand_total=%s", invoice.id, totals.grand_total)
        return invoice

    async def record_payment(self, invoice: Invoice, amount: Decimal) -> Invoice:
        """
        Add a received payment and move the invoice along
        ``pending`` -> ``partial`` -> ``paid``.
        """
        paid = (invoice.paid_amount or Decimal("0")) + to_amount(amount)
        grand_total = invoice.grand_total or Decimal("0")

        status = payment_status_for(paid, grand_total)

        invoice.paid_amount = paid
        invoice.pending_amount = max(grand_total - paid, Decimal("0"))
        invoice.payment_status = status

        await self._commit("update", invoice)
        logger.info("Recorded payment on invoice %s paid=%s status=%s", invoice.id, paid, status)
        return invoice
