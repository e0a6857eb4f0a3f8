"""Shared constants for the now-sc project layout and remote services."""

from __future__ import annotations

INBOX_DIR = "00_Inbox"
CUSTOMERS_DIR = "01_Customers"
PROMPT_TEMPLATES_DIR = "10_PromptTemplates"
DEMO_LIBRARY_DIR = "20_Demo_Library"
ASSETS_DIR = "99_Assets"

TEMPLATE_SUFFIX = ".md"

DEFAULT_PROJECT_NAME = "presales-project"

DEFAULT_TEMPLATE_REPO = "Now-AI-Foundry/Now-SC-Base-Prompts"
DEFAULT_TEMPLATE_FOLDER = "Prompts"
GITHUB_API_URL = "https://api.github.com"

OPENROUTER_API_URL = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_MODEL = "google/gemini-2.0-flash-exp:free"
APP_REFERER = "https://github.com/now-sc-cli"
APP_TITLE = "Now-SC CLI Tool"
DEFAULT_USER_INPUT = "Please provide guidance based on the system prompt."

OPENROUTER_KEY_ENV = "OPENROUTER_API_KEY"
GITHUB_TOKEN_ENV = "GITHUB_PAT"
GITHUB_ORG_ENV = "NOW_SC_GITHUB_ORG"
TEMPLATE_REPO_ENV = "NOW_SC_TEMPLATE_REPO"
TEMPLATE_FOLDER_ENV = "NOW_SC_TEMPLATE_FOLDER"

# (label, path relative to project root); "Other" is offered separately.
OUTPUT_LOCATIONS: dict[str, str] = {
    "Project Overview": f"{ASSETS_DIR}/Project_Overview",
    "Communications": f"{ASSETS_DIR}/Communications",
    "POC Documents": f"{ASSETS_DIR}/POC_Documents",
    "Notes": f"{INBOX_DIR}/notes",
}
DEFAULT_CUSTOM_OUTPUT_DIR = ASSETS_DIR

__all__ = [
    "APP_REFERER",
    "APP_TITLE",
    "ASSETS_DIR",
    "CUSTOMERS_DIR",
    "DEFAULT_CUSTOM_OUTPUT_DIR",
    "DEFAULT_MODEL",
    "DEFAULT_PROJECT_NAME",
    "DEFAULT_TEMPLATE_FOLDER",
    "DEFAULT_TEMPLATE_REPO",
    "DEFAULT_USER_INPUT",
    "DEMO_LIBRARY_DIR",
    "GITHUB_API_URL",
    "GITHUB_ORG_ENV",
    "GITHUB_TOKEN_ENV",
    "INBOX_DIR",
    "OPENROUTER_API_URL",
    "OPENROUTER_KEY_ENV",
    "OUTPUT_LOCATIONS",
    "PROMPT_TEMPLATES_DIR",
    "TEMPLATE_FOLDER_ENV",
    "TEMPLATE_REPO_ENV",
    "TEMPLATE_SUFFIX",
]
