"""
Utilities for working with CLI in tests.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import Optional


def run_cli(root: Path, *args: str, cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
    """
    Runs lq.cli against the theme in root.

    Args:
        root: Theme directory (passed as --theme)
        *args: Command line arguments for lq.cli
        cwd: Working directory (defaults to root)

    Returns:
        CompletedProcess with execution results
    """
    env = os.environ.copy()
    return subprocess.run(
        [sys.executable, "-m", "lq.cli", "--theme", str(root), *args],
        cwd=cwd or root, env=env, capture_output=True, text=True, encoding="utf-8"
    )


def jload(s: str):
    """Parses JSON output of a CLI command."""
    return json.loads(s)
