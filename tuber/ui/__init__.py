"""
UI package for the interactive selector.
"""

from .selector import InteractiveSelector, Selection, SelectorAction, SelectorState

__all__ = [
    "InteractiveSelector",
    "Selection",
    "SelectorAction",
    "SelectorState",
]
