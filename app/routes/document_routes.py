import logging
from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session
from typing import Optional

from database.init import get_db
from schemas.document_schema import DocumentResponse
from services.document_service import DocumentService
from responses.success import created_response
from responses.error import internal_server_error, service_error_response
from utils.dependencies import Identity, get_current_identity
from utils.exceptions import ServiceError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["Documents"])
document_service = DocumentService()


@router.post("/upload", status_code=201)
async def upload_document(
    file: Optional[UploadFile] = File(None),
    type: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    """
    Upload a document (ID card, admission letter, lease scan...).

    The file is stored locally and served back under /uploads.
    """
    try:
        document = await document_service.upload(db, identity, file, type)
        return created_response(DocumentResponse.model_validate(document))
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Document upload failed for user %s", identity.user_id)
        return internal_server_error("Failed to upload document")
