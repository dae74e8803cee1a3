from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from grid_editor.domain.udi import MEDIA, Udi
from .base import ConfigurationEditor, ConfigurationValidationError, ValidationResult


@dataclass(frozen=True)
class GridConfiguration:
    # Layout settings for the grid UI: columns, templates, layouts, config, styles
    items: Dict[str, Any] = field(default_factory=dict)
    # Settings of the rich text editor used by "rte" controls
    rte: Optional[Dict[str, Any]] = None
    ignore_user_start_nodes: bool = False
    # Folder that images pasted into rich text controls are filed under
    media_parent_id: Optional[Udi] = None


class GridConfigurationEditor(ConfigurationEditor):
    @property
    def default_configuration(self) -> Dict[str, Any]:
        return {
            "items": {"styles": [], "config": []},
            "rte": None,
            "ignoreUserStartNodes": False,
            "mediaParentId": None,
        }

    def validate(self, data: Dict[str, Any]) -> List[ValidationResult]:
        if not isinstance(data, dict):
            return [ValidationResult("Configuration must be an object")]

        results: List[ValidationResult] = []

        items = data.get("items")
        if items is not None and not isinstance(items, dict):
            results.append(ValidationResult("Items must be an object", ("items",)))
        elif items and "columns" in items:
            columns = items["columns"]
            if isinstance(columns, bool) or not isinstance(columns, int) or columns <= 0:
                results.append(ValidationResult("Columns must be greater than 0", ("columns",)))

        rte = data.get("rte")
        if rte is not None and not isinstance(rte, dict):
            results.append(ValidationResult("Rich text settings must be an object", ("rte",)))

        ignore_user_start_nodes = data.get("ignoreUserStartNodes")
        if ignore_user_start_nodes is not None and not isinstance(ignore_user_start_nodes, bool):
            results.append(ValidationResult("ignoreUserStartNodes must be true or false", ("ignoreUserStartNodes",)))

        media_parent_id = data.get("mediaParentId")
        if media_parent_id is not None:
            udi = Udi.try_parse(media_parent_id)
            if udi is None or udi.entity_type != MEDIA:
                results.append(ValidationResult("Media parent must be a media identifier", ("mediaParentId",)))

        return results

    def from_configuration_editor(self, data: Optional[Dict[str, Any]]) -> GridConfiguration:
        data = data or {}
        results = self.validate(data)
        if results:
            raise ConfigurationValidationError(results)

        merged = {**self.default_configuration, **data}
        media_parent_id = merged["mediaParentId"]

        return GridConfiguration(
            items=merged["items"] or {},
            rte=merged["rte"],
            ignore_user_start_nodes=bool(merged["ignoreUserStartNodes"]),
            media_parent_id=Udi.parse(media_parent_id) if media_parent_id else None,
        )

    def to_configuration_editor(self, configuration: GridConfiguration) -> Dict[str, Any]:
        return {
            "items": configuration.items,
            "rte": configuration.rte,
            "ignoreUserStartNodes": configuration.ignore_user_start_nodes,
            "mediaParentId": str(configuration.media_parent_id) if configuration.media_parent_id else None,
        }
