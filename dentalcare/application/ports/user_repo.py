from typing import Protocol, Optional

class UserDto:
    def __init__(self, id: int, email: str, role: str, name: str, password_hash: str,
                 phone: Optional[str] = None, date_of_birth: Optional[str] = None, address: Optional[str] = None):
        self.id = id
        self.email = email
        self.role = role
        self.name = name
        self.password_hash = password_hash
        self.phone = phone
        self.date_of_birth = date_of_birth
        self.address = address

class UserRepository(Protocol):
    def get_by_email(self, email: str) -> Optional[UserDto]:
        ...

    def get_by_id(self, user_id: int) -> Optional[UserDto]:
        ...
