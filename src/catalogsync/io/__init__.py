"""catalogsync I/O helpers.

Build state JSON loading lives in [`read_build_state_json()`](build_state.py:1).
"""

from __future__ import annotations

from .build_state import BuildState, read_build_state_json, write_build_state_json

__all__ = [
    "BuildState",
    "read_build_state_json",
    "write_build_state_json",
]
