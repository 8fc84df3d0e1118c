"""SmartSkills: dependency-driven skill synchronization for coding agents."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
