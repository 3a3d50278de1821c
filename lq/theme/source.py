"""
Theme source store: read-only access to theme files by logical path.

Logical paths are POSIX relative paths such as ``sections/hero.liquid`` or
``templates/index.json``. A missing file is reported as ``None``; the
renderer turns it into a placeholder.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path, PurePosixPath
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, runtime_checkable

import pathspec

from ..errors import ThemeNotFoundError

logger = logging.getLogger(__name__)

IGNORE_FILE_NAME = ".shopifyignore"


@runtime_checkable
class ThemeSource(Protocol):
    """Read-only keyed store of theme files."""

    def get_file(self, path: str) -> Optional[str]:
        """Text of the file at a logical path, or None when absent."""
        ...

    def list_files(self, prefix: str = "") -> List[str]:
        """Sorted logical paths starting with prefix."""
        ...


def normalize_path(path: str) -> Optional[str]:
    """
    Canonical logical path, or None when the path leaves the theme root.
    """
    candidate = PurePosixPath(path.replace("\\", "/"))
    if candidate.is_absolute() or ".." in candidate.parts:
        return None
    normalized = candidate.as_posix()
    if normalized in ("", "."):
        return None
    return normalized


def build_ignore_spec(root: Path) -> Optional[pathspec.PathSpec]:
    """
    Build PathSpec from .shopifyignore. Return None if the file is missing.
    """
    ignore_file = root / IGNORE_FILE_NAME
    if not ignore_file.is_file():
        return None
    lines = []
    for ln in ignore_file.read_text(encoding="utf-8", errors="ignore").splitlines():
        ln = ln.strip()
        if ln and not ln.startswith("#"):
            lines.append(ln)
    return pathspec.PathSpec.from_lines("gitwildmatch", lines)


class FilesystemThemeSource:
    """
    Theme directory on disk.

    Files matched by ``.shopifyignore`` behave as absent.
    """

    def __init__(self, root: Path):
        root = Path(root)
        if not root.is_dir():
            raise ThemeNotFoundError(f"Theme directory not found: {root}")
        self.root = root.resolve()
        self.ignore_spec = build_ignore_spec(self.root)

    def _is_ignored(self, rel_posix: str) -> bool:
        return bool(self.ignore_spec and self.ignore_spec.match_file(rel_posix))

    def get_file(self, path: str) -> Optional[str]:
        rel_posix = normalize_path(path)
        if rel_posix is None:
            logger.warning(f"[Security] Rejected theme path outside the root: {path!r}")
            return None
        if self._is_ignored(rel_posix):
            logger.debug(f"Theme file '{rel_posix}' is ignored by {IGNORE_FILE_NAME}")
            return None

        full_path = (self.root / rel_posix).resolve()
        try:
            full_path.relative_to(self.root)
        except ValueError:
            logger.warning(f"[Security] Theme path resolves outside the root: {path!r}")
            return None

        if not full_path.is_file():
            return None
        return full_path.read_text(encoding="utf-8", errors="replace")

    def list_files(self, prefix: str = "") -> List[str]:
        return sorted(p for p in self._iter_files() if p.startswith(prefix))

    def _iter_files(self) -> Iterable[str]:
        for dirpath, dirnames, filenames in os.walk(self.root):
            # Do not enter hidden directories (.git, .vscode, ...)
            dirnames[:] = [d for d in dirnames if not d.startswith(".")]
            for fn in filenames:
                rel_posix = Path(dirpath, fn).relative_to(self.root).as_posix()
                if self._is_ignored(rel_posix):
                    continue
                yield rel_posix

    def __repr__(self) -> str:
        return f"FilesystemThemeSource({str(self.root)!r})"


class MemoryThemeSource:
    """Dict-backed theme source."""

    def __init__(self, files: Optional[Mapping[str, str]] = None):
        self.files: Dict[str, str] = {}
        for path, text in (files or {}).items():
            self.put(path, text)

    def put(self, path: str, text: str) -> None:
        rel_posix = normalize_path(path)
        if rel_posix is None:
            raise ValueError(f"Invalid theme path: {path!r}")
        self.files[rel_posix] = text

    def get_file(self, path: str) -> Optional[str]:
        rel_posix = normalize_path(path)
        if rel_posix is None:
            logger.warning(f"[Security] Rejected theme path outside the root: {path!r}")
            return None
        return self.files.get(rel_posix)

    def list_files(self, prefix: str = "") -> List[str]:
        return sorted(p for p in self.files if p.startswith(prefix))


__all__ = [
    "ThemeSource",
    "FilesystemThemeSource",
    "MemoryThemeSource",
    "normalize_path",
    "build_ignore_spec",
    "IGNORE_FILE_NAME",
]
