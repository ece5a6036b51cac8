"""Codecs for reading/writing dependency catalog files.

Currently: Gradle `libs.versions.toml` (see `versions_toml.py`).
"""

from __future__ import annotations

__all__: list[str] = []
