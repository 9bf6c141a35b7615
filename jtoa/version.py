#!/usr/bin/env python3
# jtoa/version.py
"""
Version and build metadata for jtoa.
"""

__version__ = "1.0.0"
__build__ = "2026-10-17"
__license__ = "MIT"

def version_info() -> str:
    """Return human-readable version string."""
    return f"jtoa v{__version__} (build {__build__})"
