"""Local Attachment Storage - writes uploaded files into the upload directory.

Invariants:
    - Stored name is "{submission time in ms}-{original file name}"
    - Only the last path component of the client file name is used; the stored
      file always lands directly inside the upload directory
    - Disk IO runs in the threadpool, never on the event loop
    - No type or size validation: every upload is accepted

Design Decisions:
    - Returns the bare stored name; the public URL is the static mount prefix
      plus this name
    - Same-millisecond uploads of the same name overwrite each other (accepted)
"""

import logging
import shutil
from datetime import datetime
from pathlib import Path, PurePosixPath
from typing import BinaryIO

from starlette.concurrency import run_in_threadpool

from guest_services.core.errors import StorageError

logger = logging.getLogger(__name__)

FALLBACK_NAME = "upload"


def safe_file_name(original_name: str) -> str:
    """Strip client-side directories from an uploaded file name."""
    name = PurePosixPath(original_name.replace("\\", "/")).name
    if name in ("", ".", ".."):
        return FALLBACK_NAME
    return name


def stored_file_name(original_name: str, submitted_at: datetime) -> str:
    millis = int(submitted_at.timestamp()) * 1000 + submitted_at.microsecond // 1000
    return f"{millis}-{safe_file_name(original_name)}"


class LocalFileStorage:
    """Attachment storage on local disk."""

    def __init__(self, base_path: str | Path):
        self.base_path = Path(base_path).expanduser().resolve()

    def ensure_directory(self) -> None:
        self.base_path.mkdir(parents=True, exist_ok=True)

    async def save(
        self, fileobj: BinaryIO, original_name: str, submitted_at: datetime,
    ) -> str:
        """Persist an upload and return its stored name."""
        stored_name = stored_file_name(original_name, submitted_at)
        target = self.base_path / stored_name
        try:
            await run_in_threadpool(self._write, fileobj, target)
        except OSError as e:
            logger.error(
                f"Failed to store upload {original_name!r}: {e}",
                extra={"stored_name": stored_name},
            )
            raise StorageError("File storage failed", "write") from e
        logger.info(
            f"Stored upload {original_name!r}",
            extra={"stored_name": stored_name},
        )
        return stored_name

    def _write(self, fileobj: BinaryIO, target: Path) -> None:
        self.ensure_directory()
        with open(target, "wb") as out:
            shutil.copyfileobj(fileobj, out, 1024 * 1024)

    async def delete(self, stored_name: str) -> bool:
        """Remove a stored file (best effort). False if nothing was removed."""
        target = self.base_path / safe_file_name(stored_name)
        try:
            await run_in_threadpool(target.unlink)
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning(
                f"Could not remove stored upload: {e}",
                extra={"stored_name": stored_name},
            )
            return False
        return True
