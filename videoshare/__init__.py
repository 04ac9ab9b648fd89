"""
VideoShare backend: video sharing REST API with byte-range streaming
"""

__version__ = "1.0.0"
