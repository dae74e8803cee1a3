from typing import Any, List, Optional, Tuple

IndexValues = List[Tuple[str, List[Any]]]


class DefaultPropertyIndexValueFactory:
    """Indexes the stored value as is, under the property alias."""

    def get_index_values(self, alias: str, value: Optional[Any]) -> IndexValues:
        if value is None:
            return []
        return [(alias, [value])]
