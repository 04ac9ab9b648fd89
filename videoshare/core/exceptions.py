"""
Custom exception classes for video operations and global error handling
"""

from typing import Optional, Dict, Any, List
from fastapi import status


class VideoShareError(Exception):
    """Base exception for application errors"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.headers = headers
        super().__init__(self.message)


class ValidationFailedError(VideoShareError):
    """Exception raised when a request body fails validation"""

    def __init__(self, errors: List[Dict[str, str]], message: str = "Validation error"):
        self.errors = errors
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST
        )


class AuthenticationError(VideoShareError):
    """Exception raised when no user is attached to the session"""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED
        )


class PermissionDeniedError(VideoShareError):
    """Exception raised when user lacks permission for an operation"""

    def __init__(self, message: str = "Forbidden - Admin access required"):
        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN
        )


class NotFoundError(VideoShareError):
    """Exception raised when an entity is not found"""

    def __init__(self, message: str = "Not found"):
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND
        )


class VideoNotFoundError(NotFoundError):

    def __init__(self, video_id: Optional[int] = None):
        super().__init__("Video not found")
        if video_id is not None:
            self.details = {"video_id": video_id}


class UserNotFoundError(NotFoundError):

    def __init__(self, user_id: Optional[int] = None):
        super().__init__("User not found")
        if user_id is not None:
            self.details = {"user_id": user_id}


class ConflictError(VideoShareError):
    """Exception raised when a unique name is already taken"""

    def __init__(self, message: str, field: str = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details={"field": field} if field else None
        )


class FileUploadError(VideoShareError):
    """Exception raised when file upload fails"""

    def __init__(
        self,
        message: str,
        filename: str = None,
        file_type: str = None,
        status_code: int = status.HTTP_400_BAD_REQUEST
    ):
        details = {}
        if filename:
            details["filename"] = filename
        if file_type:
            details["file_type"] = file_type

        super().__init__(
            message=message,
            status_code=status_code,
            details=details
        )


class FileTypeError(FileUploadError):
    """Exception raised when file type is not allowed"""

    def __init__(self, filename: str, file_type: str):
        message = f"File type '{file_type}' not allowed for '{filename}'. Only video files are allowed"
        super().__init__(
            message=message,
            filename=filename,
            file_type=file_type
        )


class FileSizeError(FileUploadError):
    """Exception raised when file size exceeds limit"""

    def __init__(self, filename: str, max_size: int):
        message = f"File '{filename}' exceeds maximum allowed size ({max_size} bytes)"
        super().__init__(
            message=message,
            filename=filename,
            file_type="size_limit",
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
        )


class RangeNotSatisfiableError(VideoShareError):
    """Exception raised when a Range header cannot be served"""

    def __init__(self, range_header: str, file_size: int):
        self.file_size = file_size
        super().__init__(
            message="Range Not Satisfiable",
            status_code=status.HTTP_416_REQUESTED_RANGE_NOT_SATISFIABLE,
            details={"range": range_header, "file_size": file_size},
            headers={"Content-Range": f"bytes */{file_size}"}
        )


class StorageError(VideoShareError):
    """Exception raised when a disk operation fails"""

    def __init__(self, message: str, operation: str = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"operation": operation} if operation else None
        )


def create_error_response(error: VideoShareError) -> dict:
    """
    Create a standardized error response from VideoShareError

    Args:
        error: VideoShareError instance

    Returns:
        Dictionary with error details in standardized format
    """
    response = {
        "message": error.message,
        "status": False,
        "error_type": error.__class__.__name__
    }

    if isinstance(error, ValidationFailedError):
        response["errors"] = error.errors

    if error.details:
        response["details"] = error.details

    return response
