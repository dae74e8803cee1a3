# grid_editor/api/v1/content.py
import json
from flask import request, jsonify
from flask_jwt_extended import jwt_required
from werkzeug.http import http_date
from grid_editor.domain.grid import GridValue
from grid_editor.extensions import db
from grid_editor.models.data_type import DataType
from grid_editor.models.property_value import PropertyValue
from grid_editor.property_editors.base import ContentPropertyData, DataValueReference, Property
from grid_editor.property_editors.collection import get_property_editors
from grid_editor.security import resolve_user_id, security_context_from_request
from grid_editor.utils.audit import log_action
from grid_editor.utils.optimistic_lock import enforce_optimistic_lock
from grid_editor.utils.transaction import transactional
from . import v1_bp


# ------------------------
# Helpers
# ------------------------

def _variant_args():
    culture = request.args.get("culture") or None
    segment = request.args.get("segment") or None
    return culture, segment


def _load_property(content_key, alias):
    rows = PropertyValue.query.filter_by(
        content_key=content_key,
        property_alias=alias,
    ).all()

    prop = Property(alias=alias)
    for row in rows:
        prop.set_value(row.value, row.culture, row.segment)

    return prop, rows


def _resolve_data_type(rows):
    if rows:
        return rows[0].data_type

    data_type_id = request.args.get("dataTypeId")
    if data_type_id:
        return db.session.get(DataType, data_type_id)
    return None


def _resolve_editor(data_type):
    return get_property_editors().require(data_type.editor_alias)


def _to_storage(value):
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def _to_response(value):
    if isinstance(value, GridValue):
        return value.to_json()
    return value


# ------------------------
# Property values
# ------------------------

@v1_bp.route("/content/<content_key>/properties/<alias>", methods=["PUT"])
@jwt_required()
def save_property(content_key, alias):
    data = request.get_json(silent=True) or {}

    data_type = db.session.get(DataType, data.get("dataTypeId") or "")
    if data_type is None:
        return jsonify({"error": "Data type not found"}), 404

    editor = _resolve_editor(data_type)
    culture = data.get("culture") or None
    segment = data.get("segment") or None

    row = PropertyValue.query.filter_by(
        content_key=content_key,
        property_alias=alias,
        culture=culture,
        segment=segment,
    ).first()

    if row is not None:
        try:
            enforce_optimistic_lock(request.headers.get("If-Unmodified-Since"), row.updated_at)
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400

    data_type_id = data_type.id
    configuration = editor.get_configuration_editor().from_configuration_editor(data_type.configuration)
    context = security_context_from_request()

    # Runs before the transaction below: media created for pasted images is
    # committed on its own, which expires every instance loaded so far
    stored = editor.get_value_editor().from_editor(
        ContentPropertyData(data.get("value"), configuration),
        row.value if row is not None else None,
        context,
    )

    with transactional():
        with db.session.no_autoflush:
            if row is None:
                row = PropertyValue()
                row.content_key = content_key
                row.property_alias = alias
                row.culture = culture
                row.segment = segment

            row.data_type_id = data_type_id
            row.value = _to_storage(stored)
            db.session.add(row)

        db.session.flush()

        log_action(
            actor_id=resolve_user_id(context),
            action="property.save",
            entity_type="property",
            entity_id=row.id,
            payload={
                "content_key": content_key,
                "alias": alias,
                "culture": culture,
                "segment": segment,
            },
        )

    response = jsonify({"id": row.id, "value": row.value})
    response.headers["Last-Modified"] = http_date(row.updated_at)
    return response, 200


@v1_bp.route("/content/<content_key>/properties/<alias>", methods=["GET"])
@jwt_required()
def get_property(content_key, alias):
    prop, rows = _load_property(content_key, alias)
    data_type = _resolve_data_type(rows)
    if data_type is None:
        return jsonify({"error": "Property not found"}), 404

    culture, segment = _variant_args()
    value = _resolve_editor(data_type).get_value_editor().to_editor(prop, culture, segment)

    response = jsonify({"value": _to_response(value)})
    row = next((r for r in rows if (r.culture, r.segment) == (culture, segment)), None)
    if row is not None and row.updated_at is not None:
        response.headers["Last-Modified"] = http_date(row.updated_at)
    return response


@v1_bp.route("/content/<content_key>/properties/<alias>/references", methods=["GET"])
@jwt_required()
def get_property_references(content_key, alias):
    prop, rows = _load_property(content_key, alias)
    if not rows:
        return jsonify({"error": "Property not found"}), 404

    value_editor = _resolve_editor(rows[0].data_type).get_value_editor()
    if not isinstance(value_editor, DataValueReference):
        return jsonify({"references": []})

    culture, segment = _variant_args()
    references = value_editor.get_references(prop.get_value(culture, segment))

    return jsonify({
        "references": [str(reference.udi) for reference in references]
    })


@v1_bp.route("/content/<content_key>/properties/<alias>/index", methods=["GET"])
@jwt_required()
def get_property_index_values(content_key, alias):
    prop, rows = _load_property(content_key, alias)
    if not rows:
        return jsonify({"error": "Property not found"}), 404

    culture, segment = _variant_args()
    factory = _resolve_editor(rows[0].data_type).property_index_value_factory
    fields = factory.get_index_values(alias, prop.get_value(culture, segment))

    return jsonify({
        "fields": [{"name": name, "values": values} for name, values in fields]
    })
