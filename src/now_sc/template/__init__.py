"""Template management for now-sc."""

from .fetcher import Template, is_template_entry, list_templates, persist_templates
from .local import display_name, list_local_templates, preview, template_stem

__all__ = [
    "Template",
    "display_name",
    "is_template_entry",
    "list_local_templates",
    "list_templates",
    "persist_templates",
    "preview",
    "template_stem",
]
