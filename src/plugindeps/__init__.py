"""plugindeps: Prerequisite-aware dependency resolution for build-tool plugins."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
