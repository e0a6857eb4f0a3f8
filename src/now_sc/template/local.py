"""Helpers for templates already stored inside a project."""

from __future__ import annotations

from pathlib import Path

from now_sc.core.constants import TEMPLATE_SUFFIX

PREVIEW_LENGTH = 200


def list_local_templates(templates_dir: Path) -> list[str]:
    """Return sorted template filenames in *templates_dir* (files only)."""
    return sorted(
        item.name
        for item in templates_dir.iterdir()
        if item.is_file() and item.name.endswith(TEMPLATE_SUFFIX)
    )


def template_stem(filename: str) -> str:
    if filename.endswith(TEMPLATE_SUFFIX):
        return filename[: -len(TEMPLATE_SUFFIX)]
    return filename


def display_name(filename: str) -> str:
    """``Discovery_Call_Prep.md`` -> ``Discovery Call Prep``."""
    return template_stem(filename).replace("_", " ")


def preview(content: str, length: int = PREVIEW_LENGTH) -> str:
    if len(content) <= length:
        return content
    return content[:length] + "..."


__all__ = ["PREVIEW_LENGTH", "display_name", "list_local_templates", "preview", "template_stem"]
