from bizbooks.infrastructure.db.models import Client
from bizbooks.infrastructure.db.repositories.base import RecordRepository


class ClientRepository(RecordRepository[Client]):
    model = Client
