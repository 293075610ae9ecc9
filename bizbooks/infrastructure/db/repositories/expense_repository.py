import base64
import logging
import uuid
from typing import Any

from sqlalchemy import select

from bizbooks.infrastructure.db.models import Expense
from bizbooks.infrastructure.db.repositories.base import RecordRepository

logger = logging.getLogger("record_store")


class ExpenseRepository(RecordRepository[Expense]):
    model = Expense

    async def list_for_firms(self, firm_ids: list[str] | None) -> list[Expense]:
        """Expenses of the given firms (``None`` = every firm), newest first."""
        stmt = select(Expense)
        if firm_ids is not None:
            stmt = stmt.where(Expense.firm_id.in_(firm_ids))
        stmt = stmt.order_by(Expense.date.desc(), Expense.created_at.desc())
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    # ---------- attachments ----------

    @staticmethod
    def find_attachment(expense: Expense, attachment_id: str) -> dict[str, Any] | None:
        for attachment in expense.attachments or []:
            if attachment.get("id") == attachment_id:
                return attachment
        return None

    @staticmethod
    def attachment_content(attachment: dict[str, Any]) -> bytes:
        return base64.b64decode(attachment["data"])

    async def add_attachment(
        self, expense: Expense, name: str, content_type: str, content: bytes
    ) -> dict[str, Any]:
        """
        Store a file on the expense as ``{id, name, size, type, data}`` with
        the content base64-encoded. Returns the new entry.
        """
        attachment = {
            "id": str(uuid.uuid4()),
            "name": name,
            "size": len(content),
            "type": content_type,
            "data": base64.b64encode(content).decode("ascii"),
        }
        # JSON columns only notice reassignment
        expense.attachments = [*(expense.attachments or []), attachment]
        await self._commit("update", expense)
        logger.info("Attached %s (%d bytes) to expense %s", name, len(content), expense.id)
        return attachment

    async def remove_attachment(self, expense: Expense, attachment_id: str) -> bool:
        remaining = [a for a in expense.attachments or [] if a.get("id") != attachment_id]
        if len(remaining) == len(expense.attachments or []):
            return False
        expense.attachments = remaining
        await self._commit("update", expense)
        logger.info("Removed attachment %s from expense %s", attachment_id, expense.id)
        return True
