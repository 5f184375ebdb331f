from functools import wraps
from flask import current_app, jsonify, request

from resellerhub.extensions import cache
from resellerhub.services.rate_limit import FixedWindowRateLimiter

STATUS_CODES = {
    'not_found': 404,
    'invalid_state': 409,
    'invalid_transition': 409,
    'validation_error': 400,
    'store_error': 500,
}

def to_response(result, success_code=200):
    if result.get('success'):
        return jsonify(result), success_code
    return jsonify(result), STATUS_CODES.get(result.get('error_type'), 500)

def get_rate_limiter():
    limiter = current_app.extensions.get('rate_limiter')
    if limiter is None:
        limiter = FixedWindowRateLimiter(
            cache,
            current_app.config['RATE_LIMIT_REQUESTS'],
            current_app.config['RATE_LIMIT_WINDOW_SECONDS'],
        )
        current_app.extensions['rate_limiter'] = limiter
    return limiter

def client_identity():
    forwarded = request.headers.get('X-Forwarded-For', '')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.remote_addr or 'unknown'

def rate_limited(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not get_rate_limiter().hit(client_identity()):
            return jsonify({
                'success': False,
                'error': 'Too many requests, try again shortly.',
                'error_type': 'rate_limited',
            }), 429
        return f(*args, **kwargs)
    return decorated_function

def json_body():
    return request.get_json(silent=True) or {}
