"""Entry point for running Proact as a module.

Usage:
    python -m proact [command] [options]

Example:
    python -m proact generate ../my-project
    python -m proact generate --dry-run -o agent-docs ../my-project
"""

from proact.cli import app

if __name__ == "__main__":
    app()
