from bizbooks.infrastructure.db.models import Firm
from bizbooks.infrastructure.db.repositories.base import RecordRepository


class FirmRepository(RecordRepository[Firm]):
    model = Firm
