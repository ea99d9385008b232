"""Tests for the session gate redirect rule."""

import pytest

from resume_builder.auth.route_gate import RouteDecision, is_gated, resolve_route
from resume_builder.config import AuthConfig


class TestResolveRoute:
    @pytest.mark.parametrize(
        "path", ["/dashboard", "/resume-builder", "/ai-summary", "/final-resume"]
    )
    def test_signed_out_redirected_to_login(self, path):
        decision = resolve_route(path, has_session=False)
        assert decision == RouteDecision(redirect_to="/login")
        assert not decision.allowed

    @pytest.mark.parametrize(
        "path", ["/dashboard", "/resume-builder", "/ai-summary", "/final-resume"]
    )
    def test_signed_in_allowed(self, path):
        assert resolve_route(path, has_session=True).allowed

    def test_signed_in_login_redirected_home(self):
        assert resolve_route("/login", has_session=True).redirect_to == "/dashboard"

    def test_signed_out_login_allowed(self):
        assert resolve_route("/login", has_session=False).allowed

    def test_login_prefix_counts_as_login_page(self):
        assert resolve_route("/login/callback", has_session=True).redirect_to == "/dashboard"

    @pytest.mark.parametrize("has_session", [True, False])
    def test_ungated_paths_pass(self, has_session):
        assert resolve_route("/", has_session).allowed
        assert resolve_route("/about", has_session).allowed

    def test_custom_config(self):
        config = AuthConfig(login_path="/signin", home_path="/app", protected_paths=("/app",))
        assert resolve_route("/app", False, config).redirect_to == "/signin"
        assert resolve_route("/signin", True, config).redirect_to == "/app"
        assert not is_gated("/dashboard", config)
