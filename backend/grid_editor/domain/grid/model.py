"""
In-memory tree of a stored grid value: sections -> rows -> areas -> controls.

Only the members needed to walk the tree are typed. Every other member of a
node (names, ids, styles, config, ...) is kept in ``properties`` and written
back unchanged, so values of editors this package does not know about
round-trip without being interpreted.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional


class ControlKind(Enum):
    RICH_TEXT = "rte"
    MEDIA = "media"
    OTHER = "other"

    @classmethod
    def from_alias(cls, alias: str) -> "ControlKind":
        alias = alias.lower()
        if alias == cls.RICH_TEXT.value:
            return cls.RICH_TEXT
        if alias == cls.MEDIA.value:
            return cls.MEDIA
        return cls.OTHER


@dataclass
class GridEditor:
    alias: str
    properties: Dict[str, Any] = field(default_factory=dict)

    def to_json(self) -> Dict[str, Any]:
        return {**self.properties, "alias": self.alias}


@dataclass
class GridControl:
    editor: GridEditor
    # Shape depends on editor.alias
    value: Any = None
    properties: Dict[str, Any] = field(default_factory=dict)

    @property
    def kind(self) -> ControlKind:
        return ControlKind.from_alias(self.editor.alias)

    def to_json(self) -> Dict[str, Any]:
        return {**self.properties, "editor": self.editor.to_json(), "value": self.value}


@dataclass
class Area:
    controls: List[GridControl] = field(default_factory=list)
    properties: Dict[str, Any] = field(default_factory=dict)

    def to_json(self) -> Dict[str, Any]:
        return {**self.properties, "controls": [c.to_json() for c in self.controls]}


@dataclass
class Row:
    areas: List[Area] = field(default_factory=list)
    properties: Dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> Optional[str]:
        return self.properties.get("name")

    def to_json(self) -> Dict[str, Any]:
        return {**self.properties, "areas": [a.to_json() for a in self.areas]}


@dataclass
class Section:
    rows: List[Row] = field(default_factory=list)
    properties: Dict[str, Any] = field(default_factory=dict)

    def to_json(self) -> Dict[str, Any]:
        return {**self.properties, "rows": [r.to_json() for r in self.rows]}


@dataclass
class GridValue:
    sections: List[Section] = field(default_factory=list)
    properties: Dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> Optional[str]:
        return self.properties.get("name")

    def rows(self) -> Iterator[Row]:
        for section in self.sections:
            yield from section.rows

    def controls(self) -> Iterator[GridControl]:
        """All controls in document order. These are the live tree nodes."""
        for row in self.rows():
            for area in row.areas:
                yield from area.controls

    def controls_of_kind(self, kind: ControlKind) -> List[GridControl]:
        return [control for control in self.controls() if control.kind is kind]

    def rich_text_controls(self) -> List[GridControl]:
        return self.controls_of_kind(ControlKind.RICH_TEXT)

    def media_controls(self) -> List[GridControl]:
        return self.controls_of_kind(ControlKind.MEDIA)

    def to_json(self) -> Dict[str, Any]:
        return {**self.properties, "sections": [s.to_json() for s in self.sections]}
