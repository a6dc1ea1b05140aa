"""Keyboard-driven menu engine and a command that filters file lists."""

__version__ = "5.3.0"
__all__ = ["errors", "options", "utf8", "stest", "menu"]