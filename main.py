"""Cloud Function Entry Point - Root Module.

This is the root-level entry point for Google Cloud Functions.
It imports from the src package.
"""

from src.main import (
    earthquake_map,
    earthquake_scale_choices,
    earthquake_viewer,
)

__all__ = [
    "earthquake_map",
    "earthquake_scale_choices",
    "earthquake_viewer",
]
