"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from resume_builder.templates.styles import TemplateId

_TEMPLATE_IDS = tuple(t.value for t in TemplateId)


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-haiku-4-5-20251001"
    max_attempts: int = 1
    timeout: int = 60
    max_tokens: int = 2048
    temperature: float = 0.3

    def __post_init__(self):
        if not 1 <= self.max_attempts <= 5:
            raise ValueError(f"llm.max_attempts must be between 1 and 5, got {self.max_attempts}")
        if self.timeout < 1:
            raise ValueError(f"llm.timeout must be at least 1, got {self.timeout}")
        if not 0.0 <= self.temperature <= 1.0:
            raise ValueError(f"llm.temperature must be between 0 and 1, got {self.temperature}")


@dataclass(frozen=True)
class AuthConfig:
    login_path: str = "/login"
    home_path: str = "/dashboard"
    protected_paths: tuple[str, ...] = (
        "/dashboard",
        "/resume-builder",
        "/ai-summary",
        "/final-resume",
    )
    redirect_url: str = "http://localhost:8501/?page=dashboard"


@dataclass(frozen=True)
class ExportConfig:
    default_template: str = "modern"
    pdf_filename: str = "resume.pdf"
    notification_seconds: float = 3.0

    def __post_init__(self):
        if self.default_template not in _TEMPLATE_IDS:
            raise ValueError(f"export.default_template must be one of {_TEMPLATE_IDS}, got {self.default_template!r}")
        if self.notification_seconds <= 0:
            raise ValueError("export.notification_seconds must be positive")


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    export: ExportConfig = field(default_factory=ExportConfig)


def _auth_config(raw: dict) -> AuthConfig:
    data = dict(raw)
    if "protected_paths" in data:
        data["protected_paths"] = tuple(data["protected_paths"] or ())
    return AuthConfig(**data)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        # Look for config.yaml relative to the project root
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        auth=_auth_config(raw.get("auth", {})),
        export=ExportConfig(**raw.get("export", {})),
    )
