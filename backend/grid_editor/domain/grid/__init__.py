from .exceptions import MalformedValue
from .model import ControlKind, GridValue, Section, Row, Area, GridControl, GridEditor
from .codec import parse_grid_value, serialize_grid_value

__all__ = [
    "MalformedValue",
    "ControlKind",
    "GridValue",
    "Section",
    "Row",
    "Area",
    "GridControl",
    "GridEditor",
    "parse_grid_value",
    "serialize_grid_value",
]
