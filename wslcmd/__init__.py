"""Manage WSL distributions by wrapping wsl.exe."""

__version__ = '0.1.0'
