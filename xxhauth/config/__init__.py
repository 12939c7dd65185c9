"""Configuration helpers for xxhauth."""

from .common import *  # noqa: F401, F403
from . import logging, settings  # noqa: F401  # pyright: ignore[reportUnusedImport]
