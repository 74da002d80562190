"""Environment helpers.

Secrets may live in a `.env` file next to where the program is launched.
Variables already present in the process environment take precedence.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv


def load_project_dotenv(project_root: Path) -> bool:
    """Load .env from the project root if present. Return True if a file was read."""
    env_path = project_root / ".env"
    if not env_path.exists():
        return False
    load_dotenv(dotenv_path=env_path, override=False)
    return True
