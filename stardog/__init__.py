"""Multiplayer space shooter server, wire protocol and 24-bit BMP tools."""

__version__ = "0.1.0"