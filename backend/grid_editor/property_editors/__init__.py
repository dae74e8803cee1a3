from .base import (
    ConfigurationEditor,
    ConfigurationValidationError,
    ContentPropertyData,
    DataEditor,
    DataEditorAttribute,
    DataValueEditor,
    DataValueReference,
    Property,
    ValidationResult,
    data_editor,
)
from .grid import GridPropertyEditor, GridPropertyValueEditor
from .grid_configuration import GridConfiguration, GridConfigurationEditor
from .grid_index import GridPropertyIndexValueFactory
from .media_picker import MediaPickerPropertyEditor, MediaPickerPropertyValueEditor
from .rich_text import RichTextPropertyEditor, RichTextPropertyValueEditor

__all__ = [
    "ConfigurationEditor",
    "ConfigurationValidationError",
    "ContentPropertyData",
    "DataEditor",
    "DataEditorAttribute",
    "DataValueEditor",
    "DataValueReference",
    "Property",
    "ValidationResult",
    "data_editor",
    "GridPropertyEditor",
    "GridPropertyValueEditor",
    "GridConfiguration",
    "GridConfigurationEditor",
    "GridPropertyIndexValueFactory",
    "MediaPickerPropertyEditor",
    "MediaPickerPropertyValueEditor",
    "RichTextPropertyEditor",
    "RichTextPropertyValueEditor",
]
