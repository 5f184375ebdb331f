from flask import jsonify, current_app
from resellerhub.extensions import db
from . import api_bp

# JSON bodies for errors raised outside the service layer (routing, aborts)

@api_bp.app_errorhandler(404)
def not_found_error(error):
    return jsonify({
        'success': False,
        'error': getattr(error, 'description', 'Not found.'),
        'error_type': 'not_found',
    }), 404

@api_bp.app_errorhandler(405)
def method_not_allowed_error(error):
    return jsonify({
        'success': False,
        'error': 'Method not allowed.',
        'error_type': 'method_not_allowed',
    }), 405

@api_bp.app_errorhandler(500)
def internal_error(error):
    db.session.rollback()
    current_app.logger.error(f"Internal Server Error: {error}")
    return jsonify({
        'success': False,
        'error': 'Internal server error.',
        'error_type': 'store_error',
    }), 500
