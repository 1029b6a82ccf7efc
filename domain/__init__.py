"""
Domain layer: Composition logic with minimal external dependencies.

Contains:
- taxonomy: Term/Category models and first-match lookups
- selection: Arena-based selection tree and its operations
- codec: Prompt text serialization and import parsing
"""

from domain.selection import SelectionTree
from domain.taxonomy import Taxonomy, Term

__all__ = [
    "Term",
    "Taxonomy",
    "SelectionTree",
]
