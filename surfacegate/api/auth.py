"""
Request-bound session for the Flask API.
"""

from flask import request

from surfacegate.models import Identity
from surfacegate.session import bearer_token, identity_from_token


def request_token():
    """Token from the Authorization header, falling back to ?token=."""
    token = bearer_token(request.headers.get("Authorization"))
    if not token:
        token = request.args.get("token")
    return token


class RequestSession:
    """Reads the identity of whoever made the current Flask request."""

    def current_identity(self) -> Identity:
        return identity_from_token(request_token())
