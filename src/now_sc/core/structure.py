"""Fixed presales project layout and its on-disk materialization."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from now_sc.core.constants import (
    ASSETS_DIR,
    CUSTOMERS_DIR,
    DEMO_LIBRARY_DIR,
    INBOX_DIR,
    PROMPT_TEMPLATES_DIR,
)
from now_sc.errors import PreconditionError

logger = logging.getLogger(__name__)

__all__ = [
    "DirectoryNode",
    "PROJECT_SCHEMA",
    "TOP_LEVEL_DESCRIPTIONS",
    "expected_directories",
    "materialize",
    "resolve_within",
]


@dataclass(frozen=True)
class DirectoryNode:
    """One folder in the project schema.

    ``customer_container`` marks the folder that receives a single child
    named after the customer instead of its own (empty) children.
    """

    name: str
    children: tuple["DirectoryNode", ...] = ()
    customer_container: bool = False


def _dir(name: str, *children: DirectoryNode, customer_container: bool = False) -> DirectoryNode:
    return DirectoryNode(name=name, children=tuple(children), customer_container=customer_container)


PROJECT_SCHEMA: tuple[DirectoryNode, ...] = (
    _dir(
        INBOX_DIR,
        _dir("calls", _dir("internal"), _dir("external")),
        _dir("emails"),
        _dir("notes"),
    ),
    _dir(CUSTOMERS_DIR, customer_container=True),
    _dir(PROMPT_TEMPLATES_DIR),
    _dir(DEMO_LIBRARY_DIR),
    _dir(
        ASSETS_DIR,
        _dir("Project_Overview"),
        _dir("Communications"),
        _dir("POC_Documents"),
    ),
)

# Shown next to each folder in the init summary tree.
TOP_LEVEL_DESCRIPTIONS: dict[str, str] = {
    INBOX_DIR: "Raw meeting notes and transcripts",
    CUSTOMERS_DIR: "Customer-specific information",
    PROMPT_TEMPLATES_DIR: "Ready-to-use prompt templates",
    DEMO_LIBRARY_DIR: "Demo materials and resources",
    ASSETS_DIR: "Processed and synthesized outputs",
}


def materialize(
    base_path: Path,
    schema: Iterable[DirectoryNode] = PROJECT_SCHEMA,
    customer_name: str | None = None,
) -> None:
    """Create the folders described by *schema* beneath *base_path*.

    Existing folders are left alone. The customer name is used verbatim;
    ``OSError`` from the filesystem propagates and nothing is rolled back.
    """
    for node in schema:
        full_path = base_path / node.name
        if node.customer_container and customer_name:
            customer_path = full_path / customer_name
            logger.debug("Creating customer folder %s", customer_path)
            customer_path.mkdir(parents=True, exist_ok=True)
        else:
            full_path.mkdir(parents=True, exist_ok=True)

        if node.children:
            # Nested levels never carry the customer substitution.
            materialize(full_path, node.children)


def expected_directories(
    base_path: Path,
    schema: Iterable[DirectoryNode] = PROJECT_SCHEMA,
    customer_name: str | None = None,
) -> set[Path]:
    """Return every folder that ``materialize`` creates for the same arguments."""
    paths: set[Path] = set()
    for node in schema:
        full_path = base_path / node.name
        paths.add(full_path)
        if node.customer_container and customer_name:
            paths.add(full_path / customer_name)
        if node.children:
            paths |= expected_directories(full_path, node.children)
    return paths


def resolve_within(base_path: Path, relative: str | Path) -> Path:
    """Join *relative* onto *base_path*, refusing paths that land outside it.

    Absolute paths and ``..`` escapes raise ``PreconditionError``. The
    returned path is not resolved, so callers keep the path they passed in.
    """
    candidate = Path(relative)
    if candidate.is_absolute() or candidate.anchor:
        raise PreconditionError(f'"{relative}" must be a path relative to {base_path}')
    base_resolved = base_path.resolve()
    target = (base_path / candidate).resolve()
    if target != base_resolved and base_resolved not in target.parents:
        raise PreconditionError(f'"{relative}" points outside {base_path}')
    return base_path / candidate
