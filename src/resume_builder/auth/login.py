"""Login form validation and magic link request."""

from __future__ import annotations

import re

from resume_builder.clients.auth_client import MagicLinkAuth

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class LoginValidationError(ValueError):
    """The email entered on the login form was rejected."""


def validate_email(email: str) -> str:
    """Return the trimmed email or raise LoginValidationError."""
    email = (email or "").strip()
    if not email:
        raise LoginValidationError("Please enter your email address")
    if not EMAIL_PATTERN.match(email):
        raise LoginValidationError("Please enter a valid email address")
    return email


def request_magic_link(auth: MagicLinkAuth, email: str, redirect_to: str) -> str:
    """Validate the email and ask the auth service to send a sign-in link.

    Raises LoginValidationError for bad input and AuthError when the
    service fails. Returns the address the link was sent to.
    """
    email = validate_email(email)
    auth.send_magic_link(email, redirect_to)
    return email
