"""Output locations and provenance.

Environment-first, falling back to the nearest git checkout and then the CWD,
so reports never land under site-packages.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path


def _find_git_root(start: Path) -> Path | None:
    for cur in [start, *start.parents][:6]:
        if (cur / ".git").exists():
            return cur
    return None


def repo_root() -> Path:
    """Order: env var TICTREE_REPO_ROOT -> nearest parent containing .git -> CWD."""
    env = os.getenv("TICTREE_REPO_ROOT")
    if env:
        return Path(env)
    git_root = _find_git_root(Path.cwd().resolve())
    return git_root if git_root is not None else Path.cwd()


def reports_dir() -> Path:
    p = os.getenv("TICTREE_REPORTS")
    return Path(p) if p else repo_root() / "reports"


def get_git_commit() -> str | None:
    try:
        out = subprocess.check_output(
            ["git", "-C", str(repo_root()), "rev-parse", "HEAD"],
            stderr=subprocess.DEVNULL,
            text=True,
            timeout=2.0,
        )
    except (OSError, subprocess.SubprocessError):
        return None
    return out.strip() or None
