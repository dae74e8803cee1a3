from flask import jsonify
from grid_editor.domain.grid import MalformedValue
from grid_editor.property_editors.base import ConfigurationValidationError
from grid_editor.property_editors.collection import UnknownPropertyEditor
from grid_editor.utils.optimistic_lock import ConcurrencyConflict

def register_error_handlers(app):
    @app.errorhandler(MalformedValue)
    def handle_malformed_value(error):
        response = jsonify({
            "error": "MalformedValue",
            "message": str(error)
        })
        response.status_code = 400
        return response

    @app.errorhandler(ConfigurationValidationError)
    def handle_configuration_validation(error):
        response = jsonify({
            "error": "InvalidConfiguration",
            "message": str(error),
            "results": [result.to_dict() for result in error.results]
        })
        response.status_code = 400
        return response

    @app.errorhandler(ConcurrencyConflict)
    def handle_concurrency_conflict(error):
        response = jsonify({
            "error": "Conflict",
            "message": str(error)
        })
        response.status_code = 409
        return response

    @app.errorhandler(UnknownPropertyEditor)
    def handle_unknown_property_editor(error):
        response = jsonify({
            "error": "UnknownPropertyEditor",
            "message": str(error)
        })
        response.status_code = 400
        return response
