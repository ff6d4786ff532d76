"""
Resolution of the acting user for a request.

The routers depend on ``get_identity`` (or ``get_optional_identity``) and
pass the resulting ``Identity`` into every service call. Services never look
the caller up themselves.
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from hometail.core.firebase import verify_firebase_token
from hometail.db import get_db
from hometail.domains.users.repository.user_repository import UserRepository
from hometail.models.user import UserRole


@dataclass(frozen=True)
class Identity:
    user_id: int
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class AuthenticationError(Exception):
    def __init__(self, code: str, reason: str):
        super().__init__(reason)
        self.code = code
        self.reason = reason


def _resolve(authorization: Optional[str], db: Session) -> Identity:
    if not authorization:
        raise AuthenticationError("AUTH_401_1", "Authorization header is required.")

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer":
        raise AuthenticationError("AUTH_401_2", "Authorization header must be 'Bearer <token>'.")

    decoded = verify_firebase_token(parts[1])
    if decoded is None:
        raise AuthenticationError("AUTH_401_3", "Invalid or expired token.")

    user = UserRepository(db).get_by_firebase_uid(decoded["uid"])
    if user is None:
        raise AuthenticationError("AUTH_401_4", "No registered user for this token.")

    return Identity(user_id=user.user_id, role=user.role)


def get_identity(
    request: Request,
    authorization: Optional[str] = Header(None, description="Firebase ID token"),
    db: Session = Depends(get_db),
) -> Identity:
    return _resolve(authorization, db)


def get_optional_identity(
    request: Request,
    authorization: Optional[str] = Header(None, description="Firebase ID token"),
    db: Session = Depends(get_db),
) -> Optional[Identity]:
    if not authorization:
        return None
    try:
        return _resolve(authorization, db)
    except AuthenticationError:
        return None
