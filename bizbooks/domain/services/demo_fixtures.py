from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger("demo_fixtures")


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00")).astimezone(timezone.utc)


def demo_users() -> List[Dict[str, Any]]:
    return [
        {
            "id": "1",
            "name": "Jogendra Mahanta",
            "email": "jogendra@email.com",
            "role": "admin",
            "firm_access": ["1", "2"],
            "created_at": _ts("2024-01-01T00:00:00Z"),
        },
        {
            "id": "2",
            "name": "Assistant Manager",
            "email": "assistant@email.com",
            "role": "user",
            "firm_access": ["1"],
            "created_at": _ts("2024-01-15T00:00:00Z"),
        },
    ]


def demo_firms() -> List[Dict[str, Any]]:
    return [
        {
            "id": "1",
            "name": "MAA DURGA ENGINEERING",
            "description": "MECHANICAL, ELECTRICAL & CIVIL CONTRACTOR",
            "gst_number": "SBINO010243",
            "permanent_address": "At-Sarbhara, P.O.-Niundi, Dist-Keonjhar, Odisha - 758032",
            "present_address": "At-Jarali, Jajang, Bamebari, Keonjhar (Mayurbhanja), "
                               "P.O.-Jajang, Dist-Keonjhar, Odisha - 758032",
            "phone": "9437240540",
            "proprietor": "Prop. Jogendra Mahanta",
            "account_number": "30383830248",
            "ifsc_code": "SBIN0010243",
            "letterhead_type": "template",
            "created_at": _ts("2024-01-15T10:30:00Z"),
        },
        {
            "id": "2",
            "name": "JASOBANTA MAHANTA",
            "description": "A CLASS (DEGREE ENGG.) CONTRACTOR",
            "gst_number": None,
            "permanent_address": "JAROLI, JAJANG, BAMEBARI, KEONJHAR, ODISHA, 758034",
            "present_address": "JAROLI, JAJANG, BAMEBARI, KEONJHAR, ODISHA, 758034",
            "phone": "8763221699, 9337021898",
            "proprietor": "Jasobanta Mahanta",
            "account_number": None,
            "ifsc_code": None,
            "letterhead_type": "template",
            "created_at": _ts("2024-02-10T14:20:00Z"),
        },
    ]


def demo_clients() -> List[Dict[str, Any]]:
    return [
        {
            "id": "1",
            "name": "U.K. ENTERPRISES",
            "address": "JAROLI, JAJANG, BAMEBARI, KEONJHAR",
            "phone": "9876543210",
            "email": "uk.enterprises@email.com",
            "gst_number": "GSTIN123456789",
            "state": "Odisha",
            "pincode": "758034",
            "created_at": _ts("2024-01-20T09:15:00Z"),
        },
        {
            "id": "2",
            "name": "BALAJI CONSTRUCTION",
            "address": "KEONJHAR TOWN, ODISHA",
            "phone": "9123456789",
            "email": "balaji.const@email.com",
            "gst_number": "GSTIN987654321",
            "state": "Odisha",
            "pincode": "758001",
            "created_at": _ts("2024-02-05T11:30:00Z"),
        },
        {
            "id": "3",
            "name": "MODERN BUILDERS",
            "address": "BHUBANESWAR, ODISHA",
            "phone": "9988776655",
            "email": "modern.builders@email.com",
            "gst_number": "GSTIN456789123",
            "state": "Odisha",
            "pincode": "751001",
            "created_at": _ts("2024-02-12T16:45:00Z"),
        },
    ]


def demo_invoices() -> List[Dict[str, Any]]:
    """Raw invoice inputs; totals are computed when the rows are created."""
    return [
        {
            "id": "1",
            "invoice_number": "KDJ/LHR/24-25/19",
            "firm_id": "1",
            "client_id": "1",
            "invoice_date": date(2025, 1, 2),
            "description": "SAC(Services)/Total Hour(s)",
            "sac_code": "9954",
            "rate": 2000,
            "quantity": 88.9,
            "unit": "Hours",
            "gst_rate": 18,
            "created_at": _ts("2025-01-02T10:30:00Z"),
        },
        {
            "id": "2",
            "invoice_number": "JM/2025/001",
            "firm_id": "2",
            "client_id": "2",
            "invoice_date": date(2025, 1, 15),
            "description": "Construction Services",
            "sac_code": None,
            "rate": 50000,
            "quantity": 1,
            "unit": "Job",
            "gst_rate": 0,
            "created_at": _ts("2025-01-15T14:20:00Z"),
            # settled in full
            "_paid": True,
        },
    ]


def demo_expenses() -> List[Dict[str, Any]]:
    return [
        {
            "id": "1",
            "firm_id": "1",
            "description": "Diesel Payment",
            "amount": 5000,
            "category": "Fuel",
            "date": date(2025, 1, 5),
            "attachments": [],
            "created_at": _ts("2025-01-05T09:00:00Z"),
        },
        {
            "id": "2",
            "firm_id": "1",
            "description": "Equipment Maintenance",
            "amount": 12000,
            "category": "Maintenance",
            "date": date(2025, 1, 10),
            "attachments": [],
            "created_at": _ts("2025-01-10T11:30:00Z"),
        },
    ]


async def seed_demo_data(db: AsyncSession) -> bool:
    """
    Load the demo users, firms, clients, invoices and expenses.

    Does nothing if any user exists. Returns True when data was seeded.
    """
    from bizbooks.infrastructure.db.repositories import (
        ClientRepository,
        ExpenseRepository,
        FirmRepository,
        InvoiceRepository,
        UserRepository,
    )

    users = UserRepository(db)
    if await users.count():
        return False

    for row in demo_users():
        await users.create(**row, updated_at=row["created_at"])
    for row in demo_firms():
        await FirmRepository(db).create(**row, updated_at=row["created_at"])
    for row in demo_clients():
        await ClientRepository(db).create(**row, updated_at=row["created_at"])

    invoices = InvoiceRepository(db)
    for row in demo_invoices():
        paid = row.pop("_paid", False)
        inv = await invoices.create_from_inputs(**row, updated_at=row["created_at"])
        if paid:
            await invoices.record_payment(inv, inv.grand_total)

    for row in demo_expenses():
        await ExpenseRepository(db).create(**row, updated_at=row["created_at"])

    logger.info("Seeded demo data")
    return True
