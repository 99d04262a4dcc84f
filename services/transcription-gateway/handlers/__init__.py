"""Request handlers orchestrating domain and infrastructure."""

from .upload_handler import UploadHandler

__all__ = ["UploadHandler"]
