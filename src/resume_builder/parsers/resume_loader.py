"""Read and write resume documents as YAML or JSON files."""

from __future__ import annotations

import json
from pathlib import Path

import yaml

from resume_builder.models.resume import ResumeDocument

SUPPORTED_SUFFIXES = (".yaml", ".yml", ".json")


def load_resume(path: str | Path) -> ResumeDocument:
    """Load a resume file. Skills and achievements are de-duplicated on load."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Resume file not found: {p}")
    suffix = p.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported resume file type: {suffix}")

    text = p.read_text(encoding="utf-8")
    if suffix == ".json":
        data = json.loads(text) if text.strip() else {}
    else:
        data = yaml.safe_load(text) or {}
    return ResumeDocument.model_validate(data)


def save_resume(document: ResumeDocument, path: str | Path) -> Path:
    p = Path(path)
    suffix = p.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported resume file type: {suffix}")
    data = document.model_dump(by_alias=True)
    p.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".json":
        p.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    else:
        p.write_text(yaml.safe_dump(data, allow_unicode=True, sort_keys=False), encoding="utf-8")
    return p
