import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database.models import User
from enums.role import Role
from schemas.auth_schema import UserCreate
from utils.dependencies import hash_password, verify_password, create_access_token
from utils.exceptions import ConflictError, NotFoundError, UnauthenticatedError

logger = logging.getLogger(__name__)


def create_user(payload: UserCreate, db: Session, role: Role = None) -> User:
    user = User(
        name=payload.name,
        email=payload.email.lower(),
        phone=payload.phone,
        hashed_password=hash_password(payload.password),
        role=role or payload.role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Email already registered")
    db.refresh(user)
    logger.info("Registered user %s with role %s", user.id, user.role.value)
    return user


def get_user_by_email(email: str, db: Session):
    return db.query(User).filter_by(email=email.lower()).first()


def get_user_by_id(user_id: int, db: Session):
    return db.query(User).filter(User.id == user_id).first()


def register(payload: UserCreate, db: Session):
    """Create an account and return it with a fresh access token."""
    if get_user_by_email(payload.email, db):
        raise ConflictError("Email already registered")

    user = create_user(payload, db)
    return user, create_access_token(user.id, user.role)


def login(email: str, password: str, db: Session):
    user = get_user_by_email(email, db)
    # Same message for unknown email and bad password
    if not user or not verify_password(password, user.hashed_password):
        raise UnauthenticatedError("Invalid email or password")

    return user, create_access_token(user.id, user.role)


def get_profile(user_id: int, db: Session) -> User:
    user = get_user_by_id(user_id, db)
    if not user:
        raise NotFoundError("User not found")
    return user
