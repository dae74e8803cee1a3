from flask import jsonify
from flask_jwt_extended import jwt_required
from grid_editor.property_editors.collection import get_property_editors
from . import v1_bp


@v1_bp.route("/property-editors", methods=["GET"])
@jwt_required()
def list_property_editors():
    editors = get_property_editors()
    return jsonify({
        "items": [editor.to_dict() for editor in editors]
    })


@v1_bp.route("/property-editors/<alias>", methods=["GET"])
@jwt_required()
def get_property_editor(alias):
    editor = get_property_editors().get(alias)
    if editor is None:
        return jsonify({"error": "Property editor not found"}), 404

    return jsonify(editor.to_dict())
