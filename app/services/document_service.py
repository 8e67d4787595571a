import logging
from typing import Optional

from fastapi import UploadFile
from sqlalchemy.orm import Session

from database.models import Document
from services.storage_service import LocalFileStorage
from utils.dependencies import Identity
from utils.exceptions import ValidationFailedError

logger = logging.getLogger(__name__)


class DocumentService:
    def __init__(self, storage: Optional[LocalFileStorage] = None):
        self.storage = storage or LocalFileStorage()

    async def upload(
        self,
        db: Session,
        identity: Identity,
        file: Optional[UploadFile],
        document_type: Optional[str],
    ) -> Document:
        if file is None or not file.filename:
            raise ValidationFailedError("File is required")
        if not document_type:
            raise ValidationFailedError("Document type is required")

        file_url = await self.storage.save(file)

        document = Document(user_id=identity.user_id, type=document_type, file_url=file_url)
        db.add(document)
        try:
            db.commit()
        except Exception:
            db.rollback()
            # don't leave an orphaned file behind
            self.storage.delete(file_url)
            raise
        db.refresh(document)

        logger.info("User %s uploaded %s document %s", identity.user_id, document_type, document.id)
        return document
