import logging
import re
from pathlib import Path

from unigig.core.config import settings
from unigig.core.exceptions import StorageError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_RESUME_EXTENSIONS = {"pdf", "doc", "docx"}
MAX_RESUME_BYTES = 5 * 1024 * 1024

_KEY_PART = re.compile(r"^[A-Za-z0-9._-]+$")


def allowed_resume(filename: str) -> bool:
    return "." in filename and filename.rsplit(".", 1)[1].lower() in ALLOWED_RESUME_EXTENSIONS


class ResumeStorage:
    """File store keyed by relative path; storing an existing key overwrites it."""

    def __init__(self, base_dir: str = None, public_base_url: str = None, url_prefix: str = "/files/resumes"):
        self.base_dir = Path(base_dir or settings.RESUME_DIR)
        self.public_base_url = (public_base_url or settings.PUBLIC_BASE_URL).rstrip("/")
        self.url_prefix = url_prefix

    def store(self, key: str, content: bytes) -> str:
        path = self._path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as e:
            logger.error(f"Failed to store {key}: {e}")
            raise StorageError("Could not store file") from e
        logger.info(f"Stored {len(content)} bytes at {key}")
        return self.public_url(key)

    def delete(self, key: str) -> None:
        """Remove the file stored under key; a missing file is not an error."""
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Failed to delete {key}: {e}")
            raise StorageError("Could not delete file") from e

    def public_url(self, key: str) -> str:
        self._path_for(key)
        return f"{self.public_base_url}{self.url_prefix}/{key}"

    def _path_for(self, key: str) -> Path:
        parts = key.split("/")
        if not parts or any(not _KEY_PART.match(p) or p in (".", "..") for p in parts):
            raise ValidationError("Invalid file key")
        return self.base_dir.joinpath(*parts)


def resume_key(user_id: str, filename: str) -> str:
    if not allowed_resume(filename or ""):
        raise ValidationError("Upload a valid resume (pdf, doc or docx)")
    ext = filename.rsplit(".", 1)[1].lower()
    return f"{user_id}/resume.{ext}"


def stale_resume_keys(user_id: str, current_key: str):
    """Keys of the user's resumes stored under the other allowed extensions."""
    return [
        f"{user_id}/resume.{ext}"
        for ext in sorted(ALLOWED_RESUME_EXTENSIONS)
        if f"{user_id}/resume.{ext}" != current_key
    ]
