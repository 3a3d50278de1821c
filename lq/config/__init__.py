"""
Engine configuration.
"""

from __future__ import annotations

from .model import CONFIG_FILE_NAME, EngineConfig
from .load import load_engine_config

__all__ = ["CONFIG_FILE_NAME", "EngineConfig", "load_engine_config"]
