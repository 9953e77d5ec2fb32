"""Textual host integration (the demo app needs the ``textual`` extra)."""

from .controller import TextualMsclAdapter, TextualUIHooks

__all__ = ["TextualMsclAdapter", "TextualUIHooks"]
