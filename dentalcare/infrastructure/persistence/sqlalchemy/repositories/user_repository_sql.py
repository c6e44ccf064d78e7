from typing import Optional
from sqlmodel import Session, select

from .....db.models import User
from .....application.ports.user_repo import UserRepository, UserDto


class SqlUserRepository(UserRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, u: User) -> UserDto:
        return UserDto(
            id=u.id,
            email=u.email,
            role=u.role,
            name=u.name,
            password_hash=u.password_hash,
            phone=u.phone,
            date_of_birth=u.date_of_birth,
            address=u.address,
        )

    def get_by_email(self, email: str) -> Optional[UserDto]:
        u = self.session.exec(select(User).where(User.email == email)).first()
        return self._to_dto(u) if u else None

    def get_by_id(self, user_id: int) -> Optional[UserDto]:
        u = self.session.get(User, user_id)
        return self._to_dto(u) if u else None
