"""
Video file upload service with type and size validation
"""

import aiofiles
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from uuid import uuid4

import structlog
from fastapi import UploadFile
from mutagen import File as MutagenFile, MutagenError
from starlette.concurrency import run_in_threadpool

from videoshare.core.exceptions import (
    FileUploadError,
    FileSizeError,
    FileTypeError,
    StorageError
)

logger = structlog.get_logger()


@dataclass
class StoredUpload:
    original_filename: str
    filename: str
    file_path: str
    file_size: int
    mime_type: str
    duration: Optional[int] = None


class FileUploadService:
    """Persists uploaded videos under the uploads directory"""

    DEFAULT_MAX_SIZE = 500 * 1024 * 1024  # 500MB
    DEFAULT_CHUNK_SIZE = 1024 * 1024

    EXTENSION_MAPPING = {
        "video/mp4": ".mp4",
        "video/webm": ".webm",
        "video/quicktime": ".mov",
        "video/x-msvideo": ".avi",
        "video/x-matroska": ".mkv",
        "video/ogg": ".ogv",
        "video/mpeg": ".mpeg",
    }

    def __init__(
        self,
        upload_dir: str = "uploads",
        max_size: int = DEFAULT_MAX_SIZE,
        chunk_size: int = DEFAULT_CHUNK_SIZE
    ):
        """
        Initialize file upload service

        Args:
            upload_dir: Directory uploaded videos are written to
            max_size: Largest accepted upload in bytes
            chunk_size: Bytes read from the request per write
        """
        self.upload_dir = Path(upload_dir)
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        self.max_size = max_size
        self.chunk_size = chunk_size

    @staticmethod
    def is_video_type(mime_type: Optional[str]) -> bool:
        return bool(mime_type) and mime_type.lower().startswith("video/")

    def _generate_secure_filename(self, original_filename: str, mime_type: str) -> str:
        """
        Generate a collision-resistant filename unrelated to the client's name

        The extension comes from the MIME type, falling back to the original
        filename's suffix.
        """
        extension = self.EXTENSION_MAPPING.get(mime_type.lower(), "")
        if not extension and original_filename:
            suffix = Path(original_filename).suffix.lower()
            if suffix.isascii() and suffix[1:].isalnum():
                extension = suffix
        return f"{uuid4().hex}{extension}"

    def probe_duration(self, file_path: Path) -> Optional[int]:
        """Read the container duration in whole seconds, if mutagen recognises it"""
        try:
            media = MutagenFile(str(file_path))
        except MutagenError as e:
            logger.warning("Failed to probe video duration", file_path=str(file_path), error=str(e))
            return None

        length = getattr(getattr(media, "info", None), "length", None)
        if not length or length <= 0:
            return None
        return int(round(length))

    async def save_video(self, file: UploadFile) -> StoredUpload:
        """
        Stream an uploaded video to disk

        Raises:
            FileUploadError: If no file was sent
            FileTypeError: If the MIME type is not video/*
            FileSizeError: If the body exceeds the size limit
            StorageError: If writing to disk fails
        """
        if not file or not file.filename:
            raise FileUploadError("No video file uploaded")

        mime_type = file.content_type or ""
        if not self.is_video_type(mime_type):
            raise FileTypeError(file.filename, mime_type or "unknown")

        secure_filename = self._generate_secure_filename(file.filename, mime_type)
        file_path = self.upload_dir / secure_filename
        file_size = 0

        try:
            async with aiofiles.open(file_path, "wb") as out:
                while True:
                    chunk = await file.read(self.chunk_size)
                    if not chunk:
                        break
                    file_size += len(chunk)
                    if file_size > self.max_size:
                        raise FileSizeError(file.filename, self.max_size)
                    await out.write(chunk)
        except FileSizeError:
            file_path.unlink(missing_ok=True)
            raise
        except OSError as e:
            file_path.unlink(missing_ok=True)
            logger.error("Video write failed", error=str(e), file_path=str(file_path))
            raise StorageError("Failed to store uploaded video", operation="write")

        duration = await run_in_threadpool(self.probe_duration, file_path)

        logger.info(
            "Video uploaded",
            filename=file.filename,
            secure_filename=secure_filename,
            file_size=file_size,
            mime_type=mime_type,
            duration=duration
        )

        return StoredUpload(
            original_filename=file.filename,
            filename=secure_filename,
            file_path=str(file_path),
            file_size=file_size,
            mime_type=mime_type,
            duration=duration
        )

    def delete_file(self, file_path: str) -> bool:
        """
        Delete a stored video

        Returns:
            True if a file was removed, False if it was already gone

        Raises:
            StorageError: If the file exists but cannot be removed
        """
        path = Path(file_path)
        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning("Video file already missing", file_path=file_path)
            return False
        except OSError as e:
            logger.error("File deletion failed", error=str(e), file_path=file_path)
            raise StorageError("Failed to delete video file", operation="delete")

        logger.info("File deleted successfully", file_path=file_path)
        return True
