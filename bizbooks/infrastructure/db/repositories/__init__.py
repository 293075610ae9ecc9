from .base import RecordRepository, StorageError
from .client_repository import ClientRepository
from .expense_repository import ExpenseRepository
from .firm_repository import FirmRepository
from .invoice_repository import InvoiceRepository
from .user_repository import UserRepository

__all__ = [
    "RecordRepository",
    "StorageError",
    "UserRepository",
    "FirmRepository",
    "ClientRepository",
    "InvoiceRepository",
    "ExpenseRepository",
]
