from .media_service import MediaService

__all__ = ["MediaService"]
