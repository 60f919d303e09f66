"""
Upload handling helpers for ingestion endpoints.

Dependencies: fastapi
System role: Temporary file management for uploaded PDFs
"""

import logging
import shutil
import tempfile
from pathlib import Path

from fastapi import UploadFile

logger = logging.getLogger(__name__)

TEMP_DIR_PREFIX = "kb_upload_"


async def save_upload_to_temp(upload: UploadFile, upload_dir: str) -> str:
    """
    Write an uploaded file into a fresh temporary directory.

    Args:
        upload: Uploaded file
        upload_dir: Parent directory for temporary upload directories

    Returns:
        str: Path of the written file
    """
    Path(upload_dir).mkdir(parents=True, exist_ok=True)
    temp_dir = tempfile.mkdtemp(prefix=TEMP_DIR_PREFIX, dir=upload_dir)
    file_path = Path(temp_dir) / Path(upload.filename or "upload.pdf").name
    file_path.write_bytes(await upload.read())
    logger.debug("Saved upload", extra={"file_path": str(file_path)})
    return str(file_path)


def cleanup_temp_file(file_path: str) -> None:
    """
    Safely remove temporary file and its parent temp directory.

    Args:
        file_path: Path to file to remove
    """
    try:
        path = Path(file_path)
        parent_dir = path.parent

        if path.exists():
            path.unlink()
            logger.debug("Cleaned up temp file", extra={"file_path": file_path})

        if parent_dir.exists() and parent_dir.name.startswith(TEMP_DIR_PREFIX):
            shutil.rmtree(parent_dir, ignore_errors=True)

    except OSError as e:
        logger.warning(
            "Failed to cleanup temp file",
            extra={"file_path": file_path, "error": str(e)},
        )
