from __future__ import annotations

import importlib.metadata
import subprocess
from pathlib import Path
from typing import Optional


def _run_git(args: list[str], cwd: Path) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL)
        return out.decode().strip() or None
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return None


def get_package_version() -> str:
    try:
        return importlib.metadata.version("linepad")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def get_version_string() -> str:
    """Package version, plus the short git commit when run from a checkout."""
    version = get_package_version()
    commit = _run_git(["rev-parse", "HEAD"], cwd=Path(__file__).resolve().parent)
    if commit:
        return f"{version} ({commit[:7]})"
    return version
