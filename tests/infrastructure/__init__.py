"""
Unified test infrastructure for the theme renderer.

Modules:
- file_utils: Utilities for creating files and directories
- theme_builders: In-memory theme builders and engine factory
- rendering_utils: Rendering template text in a fresh pass
- cli_utils: Running the command line interface
"""

from .file_utils import write, write_tree
from .theme_builders import section_source, template_document, hero_theme, make_source, make_engine
from .rendering_utils import render
from .cli_utils import run_cli, jload

__all__ = [
    # File utilities
    "write", "write_tree",

    # Theme builders
    "section_source", "template_document", "hero_theme", "make_source", "make_engine",

    # Rendering utilities
    "render",

    # CLI utilities
    "run_cli", "jload",
]
