"""Small filesystem helpers."""

from pathlib import Path


def ensure_dir(path: Path) -> Path:
    """Create ``path`` (and parents) if missing and return it."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_lexbot_home() -> Path:
    """Get the lexbot home directory (~/.lexbot)."""
    return Path.home() / ".lexbot"
