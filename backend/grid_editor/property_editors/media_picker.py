from typing import Any, Dict, Iterator

from grid_editor.domain.udi import EntityReference, Udi
from .base import (
    ConfigurationEditor,
    DataEditor,
    DataValueEditor,
    DataValueReference,
    Groups,
    ValueTypes,
    data_editor,
)


@data_editor(
    "MediaPicker",
    "Media Picker",
    "mediapicker",
    value_type=ValueTypes.TEXT,
    icon="icon-picture",
    group=Groups.MEDIA,
)
class MediaPickerPropertyEditor(DataEditor):
    def create_value_editor(self) -> "MediaPickerPropertyValueEditor":
        return MediaPickerPropertyValueEditor(self.attribute)

    def create_configuration_editor(self) -> ConfigurationEditor:
        return MediaPickerConfigurationEditor()


class MediaPickerConfigurationEditor(ConfigurationEditor):
    @property
    def default_configuration(self) -> Dict[str, Any]:
        return {"multiPicker": False, "onlyImages": False}


class MediaPickerPropertyValueEditor(DataValueEditor, DataValueReference):
    """Values are one or more media UDIs separated by commas."""

    def get_references(self, value: Any) -> Iterator[EntityReference]:
        text = "" if value is None else value if isinstance(value, str) else str(value)
        if not text.strip():
            return

        for item in text.split(","):
            udi = Udi.try_parse(item)
            if udi is not None:
                yield EntityReference(udi)
