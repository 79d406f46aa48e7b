import hmac
from flask import current_app, request

def check_admin() -> bool:
    """
    Checks the Authorization header for a valid admin bearer token.
    """
    expected_token = current_app.config.get("ADMIN_TOKEN")
    if not expected_token:
        return False

    auth_header = request.headers.get("Authorization", "").strip()
    if not auth_header.lower().startswith("bearer "):
        return False

    provided_token = auth_header[7:].strip()
    return hmac.compare_digest(provided_token.encode(), expected_token.encode())
