"""
Request validators for the authentication endpoints.

Each field reports at most one message: the first rule it fails.
"""

import re
from typing import List, Optional

from app.schemas.auth import LoginRequest, RegisterRequest
from app.utils.localization import Localizer

USERNAME_MIN_LENGTH = 3
PASSWORD_MIN_LENGTH = 8
PASSWORD_PATTERNS = (
    re.compile(r"[A-Z]"),
    re.compile(r"[a-z]"),
    re.compile(r"[0-9]"),
    re.compile(r"[!?*.]"),
)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_register_request(request: RegisterRequest, localizer: Localizer) -> List[str]:
    """Return the list of validation messages for a registration request."""
    errors = []

    if _is_blank(request.username):
        errors.append(localizer["UsernameRequired"])
    elif len(request.username) < USERNAME_MIN_LENGTH:
        errors.append(localizer["UsernameTooShort"])

    if _is_blank(request.password):
        errors.append(localizer["PasswordRequired"])
    elif len(request.password) < PASSWORD_MIN_LENGTH or not all(
        pattern.search(request.password) for pattern in PASSWORD_PATTERNS
    ):
        errors.append(localizer["PasswordTooWeak"])

    return errors


def validate_login_request(request: LoginRequest, localizer: Localizer) -> List[str]:
    """Return the list of validation messages for a login request."""
    errors = []
    if _is_blank(request.username):
        errors.append(localizer["UsernameRequired"])
    if _is_blank(request.password):
        errors.append(localizer["PasswordRequired"])
    return errors
