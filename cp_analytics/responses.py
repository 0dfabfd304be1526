from flask import jsonify


def success_response(data=None, message='OK', status=200, **extra):
    """Wrap ``data`` in the ``{code, message, data}`` envelope."""
    body = {
        'code': 'SUCCESS',
        'message': message,
        'data': data if data is not None else {},
    }
    body.update(extra)
    return jsonify(body), status


def error_response(code, message, status, details=None):
    return jsonify({
        'code': code,
        'message': message,
        'details': details if details is not None else {},
    }), status
