"""
Building blocks shared by all property editors.

A property editor is declared with ``@data_editor(...)``. It hands out a
value editor, which converts between the editing UI and storage, and a
configuration editor, which validates the data type configuration.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from grid_editor.domain.udi import EntityReference
from grid_editor.security import SecurityContext
from .index import DefaultPropertyIndexValueFactory


class ValueTypes:
    STRING = "STRING"
    TEXT = "TEXT"
    JSON = "JSON"


class Groups:
    COMMON = "Common"
    MEDIA = "Media"
    RICH_CONTENT = "Rich Content"


@dataclass(frozen=True)
class DataEditorAttribute:
    alias: str
    name: str
    view: str
    value_type: str = ValueTypes.STRING
    icon: str = "icon-autofill"
    group: str = Groups.COMMON
    hide_label: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def data_editor(alias: str, name: str, view: str, **options):
    """Class decorator declaring a property editor's metadata."""
    def decorator(cls):
        cls.attribute = DataEditorAttribute(alias=alias, name=name, view=view, **options)
        return cls
    return decorator


@dataclass
class ContentPropertyData:
    """A value submitted by the editing UI, with its data type configuration."""

    value: Any
    data_type_configuration: Any = None


@dataclass
class Property:
    """A stored property and its values per (culture, segment) variant."""

    alias: str
    values: Dict[Tuple[Optional[str], Optional[str]], Any] = field(default_factory=dict)

    def get_value(self, culture: Optional[str] = None, segment: Optional[str] = None) -> Any:
        return self.values.get((culture, segment))

    def set_value(self, value: Any, culture: Optional[str] = None, segment: Optional[str] = None) -> None:
        self.values[(culture, segment)] = value


@dataclass(frozen=True)
class ValidationResult:
    message: str
    member_names: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "members": list(self.member_names)}


class ConfigurationValidationError(ValueError):
    def __init__(self, results: List[ValidationResult]):
        self.results = results
        super().__init__("; ".join(result.message for result in results))


class DataValueEditor:
    def __init__(self, attribute: DataEditorAttribute):
        self.attribute = attribute

    @property
    def value_type(self) -> str:
        return self.attribute.value_type

    @property
    def view(self) -> str:
        return self.attribute.view

    @property
    def hide_label(self) -> bool:
        return self.attribute.hide_label

    def from_editor(
        self,
        editor_value: ContentPropertyData,
        current_value: Any,
        context: Optional[SecurityContext] = None,
    ) -> Any:
        return editor_value.value

    def to_editor(self, property: Property, culture: Optional[str] = None, segment: Optional[str] = None) -> Any:
        value = property.get_value(culture, segment)
        return "" if value is None else value


class DataValueReference(ABC):
    """Implemented by value editors whose values point at other entities."""

    @abstractmethod
    def get_references(self, value: Any) -> Iterable[EntityReference]:
        raise NotImplementedError


class ConfigurationEditor:
    @property
    def default_configuration(self) -> Dict[str, Any]:
        return {}

    def validate(self, data: Dict[str, Any]) -> List[ValidationResult]:
        return []

    def from_configuration_editor(self, data: Optional[Dict[str, Any]]) -> Any:
        return {**self.default_configuration, **(data or {})}

    def to_configuration_editor(self, configuration: Any) -> Dict[str, Any]:
        return dict(configuration or {})


class DataEditor:
    attribute: DataEditorAttribute

    def __init__(self):
        self._value_editor: Optional[DataValueEditor] = None
        self._configuration_editor: Optional[ConfigurationEditor] = None

    @property
    def alias(self) -> str:
        return self.attribute.alias

    @property
    def name(self) -> str:
        return self.attribute.name

    def get_value_editor(self) -> DataValueEditor:
        if self._value_editor is None:
            self._value_editor = self.create_value_editor()
        return self._value_editor

    def get_configuration_editor(self) -> ConfigurationEditor:
        if self._configuration_editor is None:
            self._configuration_editor = self.create_configuration_editor()
        return self._configuration_editor

    @property
    def property_index_value_factory(self):
        return DefaultPropertyIndexValueFactory()

    def create_value_editor(self) -> DataValueEditor:
        return DataValueEditor(self.attribute)

    def create_configuration_editor(self) -> ConfigurationEditor:
        return ConfigurationEditor()

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.attribute.to_dict(),
            "defaultConfig": self.get_configuration_editor().default_configuration,
        }
