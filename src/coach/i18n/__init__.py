"""Localization helpers (text reference resolution)."""

from .translator import Translator, DEFAULT_CATALOGS  # noqa: F401
