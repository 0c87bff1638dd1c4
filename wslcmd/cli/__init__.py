"""CLI package exports for top-level command entry points."""

from __future__ import annotations

from .main import WslModalCLI, main

__all__ = ['WslModalCLI', 'main']
