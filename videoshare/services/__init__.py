"""
File storage and streaming services
"""

from .file_upload import FileUploadService, StoredUpload
from .streaming import ByteRange, build_stream_response, parse_range_header
