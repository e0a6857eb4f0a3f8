"""Generated documentation and config files at the project root."""

from __future__ import annotations

from pathlib import Path

from now_sc.core.constants import CUSTOMERS_DIR

README_FILENAME = "README.md"
ENV_EXAMPLE_FILENAME = ".env.example"
GITIGNORE_FILENAME = ".gitignore"

ENV_EXAMPLE_CONTENT = """# OpenRouter API Key
# Get your API key from https://openrouter.ai/
OPENROUTER_API_KEY=your_api_key_here
"""

GITIGNORE_PATTERNS = ("node_modules/", ".env", ".DS_Store", "*.log")


def render_readme(project_name: str, customer_name: str) -> str:
    return f"""# {project_name}

## Customer: {customer_name}

This project was bootstrapped with Now-SC CLI tool.

## Directory Structure

- **00_Inbox/** - Raw meeting notes and transcripts
  - calls/internal - Internal call recordings and notes
  - calls/external - External call recordings and notes
  - emails - Email communications
  - notes - General notes

- **{CUSTOMERS_DIR}/{customer_name}/** - Customer-specific information

- **10_PromptTemplates/** - Ready-to-use prompt templates

- **20_Demo_Library/** - Demo materials and resources

- **99_Assets/** - Processed and synthesized outputs
  - Project_Overview - High-level project summaries
  - Communications - Prepared communications
  - POC_Documents - Proof of concept documentation

## Using Prompts

To execute a prompt, use:
```bash
now-sc prompt
```

Make sure you have set the OPENROUTER_API_KEY environment variable.
"""


def render_gitignore() -> str:
    return "\n".join(GITIGNORE_PATTERNS) + "\n"


def write_project_files(project_path: Path, project_name: str, customer_name: str) -> list[Path]:
    """Write README, ``.env.example`` and ``.gitignore``; return the written paths."""
    contents = {
        README_FILENAME: render_readme(project_name, customer_name),
        ENV_EXAMPLE_FILENAME: ENV_EXAMPLE_CONTENT,
        GITIGNORE_FILENAME: render_gitignore(),
    }
    written: list[Path] = []
    for filename, text in contents.items():
        target = project_path / filename
        target.write_text(text, encoding="utf-8")
        written.append(target)
    return written


__all__ = [
    "ENV_EXAMPLE_CONTENT",
    "ENV_EXAMPLE_FILENAME",
    "GITIGNORE_FILENAME",
    "GITIGNORE_PATTERNS",
    "README_FILENAME",
    "render_gitignore",
    "render_readme",
    "write_project_files",
]
