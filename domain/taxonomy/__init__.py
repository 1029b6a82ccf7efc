"""
Taxonomy: the read-only catalogue of selectable prompt terms.

Terms are [display text, output text] pairs ranked by declaration order.
All functions in this module are pure (no file I/O).
"""

from domain.taxonomy.defaults import DEFAULT_TAXONOMY
from domain.taxonomy.loader import parse_taxonomy_tree
from domain.taxonomy.models import Category, Taxonomy, Term

__all__ = [
    "Term",
    "Category",
    "Taxonomy",
    "parse_taxonomy_tree",
    "DEFAULT_TAXONOMY",
]
