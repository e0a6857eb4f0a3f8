"""Shared help text for the init command."""

INIT_COMMAND_DOC = """
Initialize a new presales project.

Interactive Mode (default):
- Asks for the project name (default: presales-project)
- Asks for the customer name

What Gets Created:
- 00_Inbox/ - calls (internal/external), emails, notes
- 01_Customers/<customer>/
- 10_PromptTemplates/ - prompt templates fetched from GitHub
- 20_Demo_Library/
- 99_Assets/ - Project_Overview, Communications, POC_Documents
- README.md, .env.example, .gitignore
- Private GitHub repository + git remote (when GITHUB_PAT is set, unless --no-github)

Examples:
  now-sc init                                   # Interactive mode
  now-sc init --name acme-poc --customer Acme
  now-sc init -n acme-poc -c Acme --no-github
  now-sc init -n acme-poc -c Acme --github-org my-team

The git remote is configured but nothing is pushed. To push:
  git add . && git commit -m "Initial commit" && git push -u origin main
"""
