import json
from typing import Any, Dict, List

from .exceptions import MalformedValue
from .model import Area, GridControl, GridEditor, GridValue, Row, Section


def parse_grid_value(raw_json: str) -> GridValue:
    """
    Parse stored or submitted grid JSON into a GridValue tree.

    Raises MalformedValue when the text is not JSON or a node does not have
    the section/row/area/control shape. Absent or null child lists are read
    as empty.
    """
    if not isinstance(raw_json, str):
        raise MalformedValue(f"Expected JSON text, got {type(raw_json).__name__}")

    try:
        data = json.loads(raw_json)
    except json.JSONDecodeError as exc:
        raise MalformedValue(f"Invalid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})") from exc

    return grid_value_from_json(data)


def serialize_grid_value(grid: GridValue) -> str:
    return json.dumps(grid.to_json(), ensure_ascii=False, separators=(",", ":"))


def grid_value_from_json(data: Any) -> GridValue:
    root = _expect_object(data, "$")
    sections = [
        _section(item, f"sections[{i}]")
        for i, item in enumerate(_children(root, "sections", "$"))
    ]
    return GridValue(sections=sections, properties=_rest(root, "sections"))


def _section(data: Any, path: str) -> Section:
    node = _expect_object(data, path)
    rows = [
        _row(item, f"{path}.rows[{i}]")
        for i, item in enumerate(_children(node, "rows", path))
    ]
    return Section(rows=rows, properties=_rest(node, "rows"))


def _row(data: Any, path: str) -> Row:
    node = _expect_object(data, path)
    areas = [
        _area(item, f"{path}.areas[{i}]")
        for i, item in enumerate(_children(node, "areas", path))
    ]
    return Row(areas=areas, properties=_rest(node, "areas"))


def _area(data: Any, path: str) -> Area:
    node = _expect_object(data, path)
    controls = [
        _control(item, f"{path}.controls[{i}]")
        for i, item in enumerate(_children(node, "controls", path))
    ]
    return Area(controls=controls, properties=_rest(node, "controls"))


def _control(data: Any, path: str) -> GridControl:
    node = _expect_object(data, path)

    editor = _expect_object(node.get("editor"), f"{path}.editor")
    alias = editor.get("alias")
    if not isinstance(alias, str):
        raise MalformedValue("editor alias must be a string", f"{path}.editor.alias")

    return GridControl(
        editor=GridEditor(alias=alias, properties=_rest(editor, "alias")),
        value=node.get("value"),
        properties=_rest(node, "editor", "value"),
    )


def _expect_object(data: Any, path: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise MalformedValue(f"expected an object, got {_json_type(data)}", path)
    return data


def _children(node: Dict[str, Any], key: str, path: str) -> List[Any]:
    items = node.get(key)
    if items is None:
        return []
    if not isinstance(items, list):
        raise MalformedValue(f"expected an array, got {_json_type(items)}", f"{path}.{key}" if path != "$" else key)
    return items


def _rest(node: Dict[str, Any], *known: str) -> Dict[str, Any]:
    return {k: v for k, v in node.items() if k not in known}


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"
