from __future__ import annotations

from functools import wraps

from flask import g, request

from ..core.exceptions import AuthenticationError
from .tokens import TokenClaims, TokenService


def bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Access token missing")
    return token.strip()


def token_required(tokens: TokenService):
    """Decorator factory: reject requests without a valid bearer token.

    The verified claims are exposed as ``g.current_admin``.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.current_admin = tokens.verify(bearer_token())
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_admin() -> TokenClaims:
    return g.current_admin
