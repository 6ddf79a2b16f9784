"""Textual adapter for the list engine."""

from .controller import TextualListAdapter, TextualUIHooks

__all__ = ["TextualListAdapter", "TextualUIHooks"]
