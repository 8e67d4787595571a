from dataclasses import dataclass
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from typing import Optional

from config import ALGORITHM, SECRET_KEY, ACCESS_TOKEN_EXPIRE_MINUTES, BCRYPT_ROUNDS
from enums.role import Role
from utils.exceptions import UnauthenticatedError, ForbiddenError

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)
pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS
)


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, as carried by the bearer token."""

    user_id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def hash_password(password):
    return pwd_context.hash(password)


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: int, role: Role, expires_delta: Optional[timedelta] = None):
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {"sub": str(user_id), "role": Role(role).value, "exp": expire}
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def authenticate(token: Optional[str]) -> Identity:
    """Verify a bearer token and resolve the caller's identity."""
    if not token:
        raise UnauthenticatedError()
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        return Identity(user_id=int(payload["sub"]), role=Role(payload["role"]))
    except (JWTError, KeyError, ValueError, TypeError):
        raise UnauthenticatedError()


def authorize(identity: Identity, *roles: Role, message: Optional[str] = None) -> None:
    """Fail with ForbiddenError unless the caller holds one of ``roles``."""
    if identity.role not in roles:
        raise ForbiddenError(message)


def get_current_identity(token: Optional[str] = Depends(oauth2_scheme)) -> Identity:
    return authenticate(token)


def get_optional_identity(token: Optional[str] = Depends(oauth2_scheme)) -> Optional[Identity]:
    """Like get_current_identity, but anonymous callers get None.

    An invalid token is treated the same as no token.
    """
    if not token:
        return None
    try:
        return authenticate(token)
    except UnauthenticatedError:
        return None
