"""Redirect rule for the gated pages."""

from __future__ import annotations

from dataclasses import dataclass

from resume_builder.config import AuthConfig


@dataclass(frozen=True)
class RouteDecision:
    redirect_to: str | None = None

    @property
    def allowed(self) -> bool:
        return self.redirect_to is None


def is_gated(path: str, config: AuthConfig) -> bool:
    return path in config.protected_paths or path.startswith(config.login_path)


def resolve_route(path: str, has_session: bool, config: AuthConfig | None = None) -> RouteDecision:
    """Decide whether a request for ``path`` proceeds or is redirected.

    Signed-out users are sent to the login page from any gated page; signed-in
    users asking for the login page are sent to the home page.
    """
    config = config or AuthConfig()
    if not is_gated(path, config):
        return RouteDecision()
    is_login_page = path.startswith(config.login_path)
    if not has_session and not is_login_page:
        return RouteDecision(redirect_to=config.login_path)
    if has_session and is_login_page:
        return RouteDecision(redirect_to=config.home_path)
    return RouteDecision()
