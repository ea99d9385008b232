"""Supabase wrapper for passwordless (magic link) sign-in."""

from __future__ import annotations

import logging
import os

from supabase import Client, create_client

logger = logging.getLogger(__name__)


class AuthError(RuntimeError):
    """The auth service rejected or failed a request."""


class MagicLinkAuth:
    """Issues email sign-in links and reports whether a session is active."""

    def __init__(
        self,
        url: str | None = None,
        key: str | None = None,
        client: Client | None = None,
    ):
        if client is None:
            url = url or os.environ.get("SUPABASE_URL")
            key = key or os.environ.get("SUPABASE_ANON_KEY")
            if not url or not key:
                raise AuthError("SUPABASE_URL and SUPABASE_ANON_KEY must be set")
            client = create_client(url, key)
        self.client = client

    def send_magic_link(self, email: str, redirect_to: str) -> None:
        """Email a one-time sign-in link that lands on ``redirect_to``."""
        logger.debug("Requesting magic link for %s", email)
        try:
            self.client.auth.sign_in_with_otp(
                {"email": email, "options": {"email_redirect_to": redirect_to}}
            )
        except Exception as e:
            logger.error("Magic link request failed", exc_info=True)
            raise AuthError(str(e)) from e

    def verify_link(self, token_hash: str) -> None:
        """Complete sign-in from the token carried by the emailed link."""
        try:
            self.client.auth.verify_otp({"token_hash": token_hash, "type": "email"})
        except Exception as e:
            logger.error("Magic link verification failed", exc_info=True)
            raise AuthError(str(e)) from e

    def has_session(self) -> bool:
        try:
            return self.client.auth.get_session() is not None
        except Exception:
            logger.warning("Session lookup failed", exc_info=True)
            return False

    def sign_out(self) -> None:
        try:
            self.client.auth.sign_out()
        except Exception as e:
            raise AuthError(str(e)) from e
