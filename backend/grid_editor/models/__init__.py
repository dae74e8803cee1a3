from .user import User
from .media import Media
from .data_type import DataType
from .property_value import PropertyValue
from .audit_log import AuditLog

__all__ = ["User", "Media", "DataType", "PropertyValue", "AuditLog"]
