import logging
from typing import Optional, Tuple
from dataclasses import dataclass
from fastapi import HTTPException

from ..ports.user_repo import UserRepository, UserDto
from ...utils import verify_password, create_jwt_token

logger = logging.getLogger(__name__)


@dataclass
class AuthService:
    user_repo: UserRepository

    def authenticate(self, email: Optional[str], password: Optional[str]) -> UserDto:
        if not email or not password:
            raise HTTPException(status_code=400, detail="Email and password are required")
        user = self.user_repo.get_by_email(email.strip().lower())
        if not user or not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt")
            raise HTTPException(status_code=401, detail="Invalid email or password")
        return user

    def login(self, email: Optional[str], password: Optional[str]) -> Tuple[str, UserDto]:
        user = self.authenticate(email, password)
        token = create_jwt_token({"sub": str(user.id), "role": user.role})
        logger.info(f"User {user.id} logged in")
        return token, user

    def user_from_token_payload(self, payload: Optional[dict]) -> UserDto:
        if not payload:
            raise HTTPException(status_code=401, detail="Invalid or expired token")
        user_id = payload.get("sub")
        if not user_id:
            raise HTTPException(status_code=401, detail="Invalid token: missing user ID")
        try:
            user = self.user_repo.get_by_id(int(user_id))
        except (ValueError, TypeError):
            raise HTTPException(status_code=401, detail="Invalid token: invalid user ID format")
        if not user:
            raise HTTPException(status_code=401, detail="User not found")
        return user
