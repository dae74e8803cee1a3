from flask import request, jsonify
from flask_jwt_extended import jwt_required
from grid_editor.extensions import db
from grid_editor.models.data_type import DataType
from grid_editor.property_editors.collection import get_property_editors
from grid_editor.security import resolve_user_id, security_context_from_request
from grid_editor.utils.audit import log_action
from grid_editor.utils.transaction import transactional
from . import v1_bp


def normalize_data_type(data_type):
    return {
        "id": data_type.id,
        "name": data_type.name,
        "editorAlias": data_type.editor_alias,
        "configuration": data_type.configuration or {},
    }


@v1_bp.route("/data-types", methods=["POST"])
@jwt_required()
def create_data_type():
    data = request.get_json(silent=True) or {}

    name = data.get("name")
    editor_alias = data.get("editorAlias")
    if not name or not editor_alias:
        return jsonify({"error": "name and editorAlias are required"}), 400

    editor = get_property_editors().get(editor_alias)
    if editor is None:
        return jsonify({"error": f"Unknown property editor: {editor_alias}"}), 400

    # Raises ConfigurationValidationError, handled as 400
    configuration_editor = editor.get_configuration_editor()
    configuration = configuration_editor.from_configuration_editor(data.get("configuration"))

    data_type = DataType()
    data_type.name = name
    data_type.editor_alias = editor_alias
    data_type.configuration = configuration_editor.to_configuration_editor(configuration)

    context = security_context_from_request()

    with transactional():
        db.session.add(data_type)
        db.session.flush()  # ensures data_type.id exists

        log_action(
            actor_id=resolve_user_id(context),
            action="data_type.create",
            entity_type="data_type",
            entity_id=data_type.id,
            payload={"name": name, "editor_alias": editor_alias},
        )

    return jsonify(normalize_data_type(data_type)), 201


@v1_bp.route("/data-types/<data_type_id>", methods=["GET"])
@jwt_required()
def get_data_type(data_type_id):
    data_type = db.session.get(DataType, data_type_id)
    if data_type is None:
        return jsonify({"error": "Data type not found"}), 404

    return jsonify(normalize_data_type(data_type))
