"""
Unique data identifiers (UDIs) and the entity references built from them.

A UDI names an entity across the platform: ``udi://<entity-type>/<guid>``,
where the guid is written as 32 lowercase hex digits.
"""
from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from typing import Optional

SCHEME = "udi"
MEDIA = "media"
DOCUMENT = "document"

_UDI_RE = re.compile(r"^udi://(?P<type>[a-z0-9\-]+)/(?P<id>[a-f0-9\-]{32,36})$", re.IGNORECASE)


@dataclass(frozen=True)
class Udi:
    entity_type: str
    guid: uuid.UUID

    def __str__(self) -> str:
        return f"{SCHEME}://{self.entity_type}/{self.guid.hex}"

    @classmethod
    def parse(cls, value: str) -> "Udi":
        udi = cls.try_parse(value)
        if udi is None:
            raise ValueError(f"Invalid UDI: {value!r}")
        return udi

    @classmethod
    def try_parse(cls, value: Optional[str]) -> Optional["Udi"]:
        if not isinstance(value, str):
            return None

        match = _UDI_RE.match(value.strip())
        if not match:
            return None

        try:
            guid = uuid.UUID(match.group("id"))
        except ValueError:
            return None

        return cls(match.group("type").lower(), guid)


@dataclass(frozen=True)
class EntityReference:
    """An entity found inside a property value, used for dependency tracking."""

    udi: Udi
    relation_type_alias: Optional[str] = None
