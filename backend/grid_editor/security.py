"""
Request-scoped security context.

Value editors never look up the current user themselves; the caller builds a
SecurityContext for the request and passes it in.
"""
from dataclasses import dataclass
from typing import Optional

from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from grid_editor.constants import SUPER_USER_ID


@dataclass(frozen=True)
class SecurityContext:
    user_id: Optional[str] = None


def resolve_user_id(context: Optional[SecurityContext]) -> str:
    """The acting user, falling back to the super user when nobody is signed in."""
    if context is None or context.user_id is None:
        return SUPER_USER_ID
    return context.user_id


def security_context_from_request() -> SecurityContext:
    verify_jwt_in_request(optional=True)
    identity = get_jwt_identity()
    return SecurityContext(user_id=str(identity) if identity is not None else None)
