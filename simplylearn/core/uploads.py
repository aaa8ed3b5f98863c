import logging
import shutil
import time
from pathlib import Path

from fastapi import UploadFile

from simplylearn.core.config import ALLOWED_UPLOAD_EXTENSIONS, UPLOAD_URL_PREFIX
from simplylearn.core.errors import InvalidInput

logger = logging.getLogger(__name__)


class UploadStore:
    """Writes submission files to a local directory served at /uploads."""

    def __init__(self, root: str | Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def extension_of(filename: str) -> str:
        return Path(filename or "").suffix.lower()

    def save(self, upload: UploadFile) -> str:
        ext = self.extension_of(upload.filename)
        if ext not in ALLOWED_UPLOAD_EXTENSIONS:
            raise InvalidInput("Only PDF, DOC, DOCX, PPTX, and ZIP files are allowed")

        stamp = time.time_ns() // 1_000_000
        name = f"{stamp}{ext}"
        n = 1
        # two uploads in the same millisecond
        while (self.root / name).exists():
            name = f"{stamp}-{n}{ext}"
            n += 1
        target = self.root / name

        with target.open("wb") as out:
            shutil.copyfileobj(upload.file, out)

        logger.info("Stored upload %s as %s", upload.filename, name)
        return f"{UPLOAD_URL_PREFIX}/{name}"

    def delete(self, url: str | None) -> bool:
        """Remove a file previously returned by save(); other URLs are ignored."""
        prefix = f"{UPLOAD_URL_PREFIX}/"
        if not url or not url.startswith(prefix):
            return False

        name = url[len(prefix):]
        if not name or Path(name).name != name:
            return False

        target = self.root / name
        if not target.is_file():
            return False
        target.unlink()
        logger.info("Removed upload %s", name)
        return True
