import os
from pathlib import Path


def dot_playlist() -> Path:
    override = os.environ.get("PLAYLIST_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".playlist"


def package_root() -> Path:
    return Path(__file__).resolve().parent.parent


def migrations_dir(module_path: str) -> Path:
    """Resolve the migrations/ directory for a dotted module path like 'playlist.core'."""
    module_dir = package_root()
    for part in module_path.split(".")[1:]:
        module_dir = module_dir / part
    return module_dir / "migrations"
