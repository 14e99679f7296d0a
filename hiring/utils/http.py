"""Response envelope and request-body helpers shared by the blueprints."""
from flask import jsonify, request
from werkzeug.datastructures import MultiDict
from ..errors import ValidationError


def api_response(data=None, message="Success", status_code=200):
    return jsonify({
        "statusCode": status_code,
        "data": data,
        "message": message,
        "success": status_code < 400,
    }), status_code


def json_body():
    if request.form:
        return request.form.to_dict()
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def _form_value(value):
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def formdata(body=None):
    """Scalar body values as form strings for WTForms; nulls count as absent."""
    body = json_body() if body is None else body
    return MultiDict([(k, _form_value(v)) for k, v in body.items()
                      if v is not None and not isinstance(v, (list, dict))])


def validate(form):
    if not form.validate():
        raise ValidationError("Validation failed", errors=form.errors)
    return form


def page_args(default_limit=10, max_limit=100):
    page = max(request.args.get("page", default=1, type=int) or 1, 1)
    limit = request.args.get("limit", default=default_limit, type=int) or default_limit
    return page, min(max(limit, 1), max_limit)
