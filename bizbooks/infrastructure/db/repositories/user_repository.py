from sqlalchemy import select

from bizbooks.infrastructure.db.models import User
from bizbooks.infrastructure.db.repositories.base import RecordRepository


class UserRepository(RecordRepository[User]):
    model = User

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email.strip().lower())
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()
