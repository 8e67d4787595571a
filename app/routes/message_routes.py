import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from database.init import get_db
from schemas.message_schema import MessageCreate, MessageResponse
from services.message_service import MessageService
from responses.success import created_response, paginated_response
from responses.error import internal_server_error, service_error_response
from utils.dependencies import Identity, get_current_identity
from utils.exceptions import ServiceError
from utils.pagination import PageParams, page_params, page_meta

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/messages", tags=["Messages"])
message_service = MessageService()


@router.get("")
def list_messages(
    user_id: Optional[int] = Query(None, alias="userId"),
    page: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    """Inbox and outbox of the caller; ``userId`` narrows it to one conversation."""
    try:
        messages, total = message_service.list_messages(db, identity, page, partner_id=user_id)
        return paginated_response(
            [MessageResponse.model_validate(m) for m in messages],
            page_meta(total, page),
        )
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Failed to list messages for user %s", identity.user_id)
        return internal_server_error("Failed to fetch messages")


@router.post("", status_code=201)
def send_message(
    message_in: MessageCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    try:
        message = message_service.send_message(db, identity, message_in)
        return created_response(MessageResponse.model_validate(message))
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Failed to send message from user %s", identity.user_id)
        return internal_server_error("Failed to send message")
