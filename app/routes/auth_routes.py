import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from schemas.auth_schema import (
    LoginRequest,
    UserCreate,
    UserResponse,
    AuthResponse,
)
from database.init import get_db
from utils.dependencies import Identity, get_current_identity
from utils.exceptions import ServiceError
from services.auth_service import register, login, get_profile

from responses.success import data_response, created_response
from responses.error import internal_server_error, service_error_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", status_code=201)
def register_user(payload: UserCreate, db: Session = Depends(get_db)):
    """Create a STUDENT or LANDLORD account and sign it in."""
    try:
        user, token = register(payload, db)
        return created_response(
            AuthResponse(user=UserResponse.model_validate(user), token=token)
        )
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Registration failed for %s", payload.email)
        return internal_server_error("Failed to register user")


@router.post("/login")
def login_user(credentials: LoginRequest, db: Session = Depends(get_db)):
    try:
        user, token = login(credentials.email, credentials.password, db)
        return data_response(
            AuthResponse(user=UserResponse.model_validate(user), token=token)
        )
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Login failed")
        return internal_server_error("Failed to login")


@router.get("/me")
def get_me(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    """Profile of the authenticated user"""
    try:
        user = get_profile(identity.user_id, db)
        return data_response(UserResponse.model_validate(user))
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Failed to fetch profile of user %s", identity.user_id)
        return internal_server_error("Failed to fetch user")
