"""
Base exceptions for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from LQUserError.

Programming errors and bugs should NOT inherit from LQUserError:
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import Optional


class LQUserError(Exception):
    """
    Base class for all user-facing errors of the theme renderer.

    These errors indicate problems that the user can fix:
    a broken lq.yaml, a missing theme directory, an unparsable template document.
    """
    pass


class ThemeConfigError(LQUserError):
    """Invalid engine configuration (lq.yaml)."""
    pass


class ThemeNotFoundError(LQUserError):
    """Theme root directory does not exist."""
    pass


class DocumentError(LQUserError):
    """
    Template document (templates/<name>.json) is not valid JSON.

    This is the only render-time fault that is not recovered locally:
    without a parsed document there is no section order to walk.
    """

    def __init__(self, template_name: str, cause: Optional[Exception] = None):
        detail = f": {cause}" if cause else ""
        super().__init__(f"Template JSON parse error in '{template_name}'{detail}")
        self.template_name = template_name
        self.cause = cause


__all__ = ["LQUserError", "ThemeConfigError", "ThemeNotFoundError", "DocumentError"]
