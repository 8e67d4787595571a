import os
import secrets
import time

from fastapi import UploadFile

from config import UPLOAD_DIR, UPLOAD_URL_PREFIX, MAX_UPLOAD_SIZE
from utils.exceptions import ValidationFailedError

CHUNK_SIZE = 1024 * 1024


class LocalFileStorage:
    """Stores uploaded files on local disk and serves them under /uploads."""

    def __init__(self, upload_dir: str = UPLOAD_DIR, max_size: int = MAX_UPLOAD_SIZE):
        self.upload_dir = upload_dir
        self.max_size = max_size

    def size_error(self) -> str:
        return f"File size must not exceed {self.max_size // (1024 * 1024)}MB"

    def build_filename(self, original_name: str) -> str:
        _, ext = os.path.splitext(original_name or "")
        ext = ext.lstrip(".") or "bin"
        return f"{int(time.time() * 1000)}-{secrets.token_hex(4)}.{ext}"

    async def save(self, file: UploadFile) -> str:
        """
        Save an uploaded file and return the URL it is served from.

        Raises:
            ValidationFailedError: If the file is larger than the size limit
        """
        if file.size is not None and file.size > self.max_size:
            raise ValidationFailedError(self.size_error())

        os.makedirs(self.upload_dir, exist_ok=True)
        filename = self.build_filename(file.filename)
        file_path = os.path.join(self.upload_dir, filename)

        written = 0
        with open(file_path, "wb") as buffer:
            while True:
                chunk = await file.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > self.max_size:
                    break
                buffer.write(chunk)

        # size was not announced up front and the stream ran over the limit
        if written > self.max_size:
            os.remove(file_path)
            raise ValidationFailedError(self.size_error())

        return f"{UPLOAD_URL_PREFIX}/{filename}"

    def delete(self, file_url: str) -> None:
        filename = os.path.basename(file_url)
        file_path = os.path.join(self.upload_dir, filename)
        if os.path.exists(file_path):
            os.remove(file_path)
