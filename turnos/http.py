from flask import jsonify

def jerror(status: int, code: str, message: str, details=None):
    payload = {"code": code, "message": message}
    if details:
        payload["details"] = details
    return jsonify(payload), status

def jresult(result, status: int = 200):
    """Serializes a service result model as the response body."""
    return jsonify(result.model_dump(mode="json")), status
