import json
import logging
from typing import Any, List, Optional

from grid_editor.constants import RAW_FIELD_PREFIX
from grid_editor.domain.grid import MalformedValue, parse_grid_value
from grid_editor.richtext.html import strip_html
from .index import IndexValues

logger = logging.getLogger(__name__)


class GridPropertyIndexValueFactory:
    """
    Turns a grid value into search index fields.

    Text from every control with a string value is indexed under
    ``<alias>.<row name>``, and once more, joined, under ``<alias>``.
    The untouched value is kept in ``__Raw_<alias>``.
    """

    def get_index_values(self, alias: str, value: Optional[Any]) -> IndexValues:
        if value is None:
            return []

        raw = value if isinstance(value, str) else json.dumps(value)
        if not raw.strip():
            return []

        try:
            grid = parse_grid_value(raw)
        except MalformedValue as exc:
            logger.warning("Could not index grid property %s: %s", alias, exc)
            return []

        result: IndexValues = []
        texts: List[str] = []

        for row in grid.rows():
            for area in row.areas:
                for control in area.controls:
                    if not isinstance(control.value, str):
                        continue

                    text = strip_html(control.value)
                    texts.append(text)
                    if row.name:
                        result.append((f"{alias}.{row.name}", [text]))

        if texts:
            result.append((f"{RAW_FIELD_PREFIX}{alias}", [raw]))
            result.append((alias, [" ".join(texts)]))

        return result
