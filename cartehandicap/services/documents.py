"""Proof document storage. Files live on disk, only their reference is persisted."""

import logging
import os
import secrets
import shutil
import time

from fastapi import Depends, UploadFile

from cartehandicap.config import Config, get_config
from cartehandicap.errors.user import DocumentRejected, DocumentRequired

logger = logging.getLogger(__name__)


class DocumentStorage:
    ALLOWED_TYPES = ("pdf", "jpg", "jpeg", "png")

    def __init__(self, config: Config = Depends(get_config)):
        self.config = config

    def _check(self, document: UploadFile) -> str:
        """Validate the upload and return its normalized extension"""
        extension = os.path.splitext(document.filename or "")[1].lower()
        content_type = (document.content_type or "").lower()
        if extension.lstrip(".") not in self.ALLOWED_TYPES or not any(
            allowed in content_type for allowed in self.ALLOWED_TYPES
        ):
            raise DocumentRejected(f"allowed formats are {', '.join(self.ALLOWED_TYPES)}")

        document.file.seek(0, os.SEEK_END)
        size = document.file.tell()
        document.file.seek(0)
        if size == 0:
            raise DocumentRequired
        if size > self.config.max_document_size:
            raise DocumentRejected(
                f"file exceeds {self.config.max_document_size // (1024 * 1024)} MB"
            )
        return extension

    def save(self, document: UploadFile | None) -> str:
        """Store the document under a unique name, return that name"""
        if document is None or not document.filename:
            raise DocumentRequired
        extension = self._check(document)

        filename = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{extension}"
        os.makedirs(self.config.documents_dir, exist_ok=True)
        with open(self.config.documents_dir / filename, "wb") as buffer:
            shutil.copyfileobj(document.file, buffer)
        logger.info("Stored proof document %s", filename)
        return filename

    def discard(self, reference: str) -> None:
        try:
            os.remove(self.config.documents_dir / reference)
        except OSError:
            logger.warning("Could not remove orphan document %s", reference)
