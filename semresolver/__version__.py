"""
semresolver version information.

This module provides the single source of truth for the package version.
It follows Semantic Versioning: https://semver.org/
"""

from __future__ import annotations

from semantic_version import Version

__version__ = "0.1.0"

#: Structured view of :data:`__version__`.
VERSION_INFO = Version(__version__)

#: Human-readable version (for CLI banners).
VERSION_STRING = f"semresolver {__version__}"
