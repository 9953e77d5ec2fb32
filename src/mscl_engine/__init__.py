"""Structural indentation engine for the MSCL scripting language."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "cli",
    "config",
    "runtime",
    "syntax",
]

__version__ = "0.1.0"
