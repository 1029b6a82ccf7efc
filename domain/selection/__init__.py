"""
Selection tree: the user's current composition of taxonomy terms.

Nodes live in an arena (SelectionTree) and are either a Leaf wrapping one
Term or a Group owning ordered children and an optional weight.
"""

from domain.selection.nodes import Group, Leaf, NodeId, SelectionNode, SelectionTree
from domain.selection.ops import (
    add_term,
    check_invariants,
    find_group,
    group,
    insert,
    lowest_common_ancestor,
    remove,
    remove_term,
    set_weight,
    top_level_group,
    ungroup,
)
from domain.selection.ordering import compare_ranks, rank_key

__all__ = [
    # Tree model
    "SelectionTree",
    "SelectionNode",
    "Leaf",
    "Group",
    "NodeId",
    # Ordering
    "compare_ranks",
    "rank_key",
    # Operations
    "insert",
    "remove",
    "find_group",
    "lowest_common_ancestor",
    "group",
    "ungroup",
    "add_term",
    "remove_term",
    "set_weight",
    "top_level_group",
    "check_invariants",
]
