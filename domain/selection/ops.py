"""
Tree operations over a SelectionTree.

Every public operation leaves the tree fully consistent before returning:
children sorted by rank, no empty non-root groups, one parent per node.
Operations given a term or child that is not in the tree are no-ops.
"""

import logging

from domain.selection.nodes import Group, Leaf, NodeId, SelectionTree
from domain.selection.ordering import rank_key
from domain.taxonomy.models import Term

logger = logging.getLogger(__name__)


def _sort_children(tree: SelectionTree, group_id: NodeId) -> None:
    group = tree.group(group_id)
    group.children.sort(key=lambda child_id: rank_key(tree.rank(child_id)))


def _resort_upwards(tree: SelectionTree, group_id: NodeId) -> None:
    # A group's rank follows its first child, so a change can reorder every ancestor.
    _sort_children(tree, group_id)
    for ancestor_id in tree.ancestors(group_id):
        _sort_children(tree, ancestor_id)


def _find_leaf(tree: SelectionTree, root_id: NodeId, term: Term) -> tuple[NodeId, NodeId] | None:
    """Return (owning group id, leaf id) for the first leaf wrapping term, depth-first."""
    for child_id in tree.group(root_id).children:
        match tree.node(child_id):
            case Leaf(term=leaf_term) if leaf_term.rank == term.rank:
                return root_id, child_id
            case Leaf():
                continue
            case Group():
                found = _find_leaf(tree, child_id, term)
                if found is not None:
                    return found
            case other:
                raise TypeError(f"Unexpected node type: {type(other)}")
    return None


def _detach(tree: SelectionTree, group_id: NodeId, child_id: NodeId, keep: NodeId | None = None) -> bool:
    """
    Unlink child from group, then prune or dissolve the group as needed.

    The group named by keep is never pruned or dissolved; it is the target of
    an insert that is still in progress.
    """
    group = tree.group(group_id)
    if child_id not in group.children:
        logger.debug("Node %s is not a child of group %s; nothing to detach", child_id, group_id)
        return False

    group.children.remove(child_id)
    tree.node(child_id).parent = None

    if group.parent is None:
        _sort_children(tree, group_id)
        return True

    if group_id == keep:
        _resort_upwards(tree, group_id)
        return True

    if not group.children:
        if _detach(tree, group.parent, group_id, keep):
            tree.discard(group_id)
        return True

    if _needs_dissolve(tree, group_id):
        _dissolve(tree, group_id)
        return True

    _resort_upwards(tree, group_id)
    return True


def _needs_dissolve(tree: SelectionTree, group_id: NodeId) -> bool:
    group = tree.group(group_id)
    return (
        group.parent is not None
        and group.weight is None
        and len(group.children) == 1
        and isinstance(tree.node(group.children[0]), Group)
    )


def _dissolve(tree: SelectionTree, group_id: NodeId) -> None:
    """Replace an unweighted single-child group by that child in its parent."""
    group = tree.group(group_id)
    parent_id = group.parent
    if parent_id is None:
        return
    (child_id,) = group.children
    parent = tree.group(parent_id)
    parent.children[parent.children.index(group_id)] = child_id
    tree.node(child_id).parent = parent_id
    group.children.clear()
    group.parent = None
    tree.discard(group_id)
    _resort_upwards(tree, parent_id)


def insert(tree: SelectionTree, group_id: NodeId, *node_ids: NodeId) -> None:
    """
    Append nodes as children of a group and restore rank order.

    A node that already has a parent is detached from it first, so a node
    never has two parents. Pruning caused by that detach never removes the
    target group. Inserting a group into its own subtree is a logic error and
    raises ValueError.
    """
    group = tree.group(group_id)
    for node_id in node_ids:
        if node_id == group_id or node_id in tree.ancestors(group_id):
            raise ValueError(f"Cannot insert node {node_id} into its own subtree ({group_id})")

        node = tree.node(node_id)
        if node.parent == group_id:
            continue
        if node.parent is not None:
            _detach(tree, node.parent, node_id, keep=group_id)

        group.children.append(node_id)
        node.parent = group_id

    if _needs_dissolve(tree, group_id):
        _dissolve(tree, group_id)
    else:
        _resort_upwards(tree, group_id)


def remove(tree: SelectionTree, group_id: NodeId, child_id: NodeId) -> None:
    """
    Remove a child (and its subtree) from a group.

    A non-root group left empty is removed from its own parent, recursively.
    A non-root, unweighted group left with a single group child is dissolved
    into its parent. No-op if child is not a child of the group.
    """
    if _detach(tree, group_id, child_id):
        tree.discard(child_id)


def find_group(tree: SelectionTree, root_id: NodeId, term: Term) -> NodeId | None:
    """Return the id of the group directly containing the leaf for term, or None."""
    found = _find_leaf(tree, root_id, term)
    return found[0] if found is not None else None


def lowest_common_ancestor(tree: SelectionTree, root_id: NodeId, *terms: Term) -> NodeId | None:
    """
    Return the deepest group containing every given term.

    Returns root_id when the terms share no group below it, or None if any
    term is not in the tree. Callers pass at least two terms.
    """
    chains: list[list[NodeId]] = []
    for term in terms:
        owner_id = find_group(tree, root_id, term)
        if owner_id is None:
            return None
        chain = [owner_id]
        for ancestor_id in tree.ancestors(owner_id):
            chain.append(ancestor_id)
            if ancestor_id == root_id:
                break
        # root end first
        chains.append(chain[::-1])

    common: NodeId | None = None
    for level in zip(*chains):
        if any(node_id != level[0] for node_id in level):
            break
        common = level[0]
    return common


def group(tree: SelectionTree, root_id: NodeId, *terms: Term) -> NodeId | None:
    """
    Merge the given terms into one new group placed at their common ancestor.

    Each term gets a fresh singleton group inside the new composite. A term
    whose previous owner was a weighted singleton keeps that weight. The
    composite is attached before the old leaves are removed. Terms not in the
    tree are skipped; if fewer than two remain the tree is left unchanged.
    Returns the composite's id, or None if nothing was grouped.
    """
    located: list[tuple[Term, NodeId, NodeId]] = []
    seen: set[tuple[int, ...]] = set()
    for term in terms:
        if term.rank in seen:
            continue
        seen.add(term.rank)
        found = _find_leaf(tree, root_id, term)
        if found is None:
            logger.debug("Term %r is not selected; skipped from group", term.output_text)
            continue
        located.append((term, *found))
    if len(located) < 2:
        return None

    target_id = lowest_common_ancestor(tree, root_id, *(term for term, _, _ in located))
    if target_id is None:
        target_id = root_id

    composite = tree.new_group()
    for term, owner_id, _ in located:
        owner = tree.group(owner_id)
        carried = owner.weight if owner_id != root_id and len(owner.children) == 1 else None
        singleton = tree.new_group(weight=carried)
        insert(tree, singleton.id, tree.new_leaf(term).id)
        insert(tree, composite.id, singleton.id)

    insert(tree, target_id, composite.id)

    for _, owner_id, leaf_id in located:
        if owner_id in tree:
            remove(tree, owner_id, leaf_id)
    return composite.id


def ungroup(tree: SelectionTree, root_id: NodeId, *terms: Term) -> None:
    """Move each term out of its group into a fresh singleton directly under root."""
    for term in terms:
        found = _find_leaf(tree, root_id, term)
        if found is None:
            logger.debug("Term %r is not selected; nothing to ungroup", term.output_text)
            continue
        owner_id, leaf_id = found
        if owner_id == root_id:
            continue

        singleton = tree.new_group()
        insert(tree, singleton.id, tree.new_leaf(term).id)
        insert(tree, root_id, singleton.id)
        remove(tree, owner_id, leaf_id)


def add_term(tree: SelectionTree, term: Term) -> NodeId:
    """Select a term: wrap it in a singleton group under the root. Idempotent."""
    owner_id = find_group(tree, tree.root_id, term)
    if owner_id is not None:
        return owner_id
    singleton = tree.new_group()
    insert(tree, singleton.id, tree.new_leaf(term).id)
    insert(tree, tree.root_id, singleton.id)
    return singleton.id


def remove_term(tree: SelectionTree, term: Term) -> bool:
    """Deselect a term. Returns False if it was not selected."""
    found = _find_leaf(tree, tree.root_id, term)
    if found is None:
        return False
    remove(tree, *found)
    return True


def set_weight(tree: SelectionTree, group_id: NodeId, weight: float | None) -> None:
    tree.group(group_id).weight = None if weight is None else float(weight)


def top_level_group(tree: SelectionTree, root_id: NodeId, term: Term) -> NodeId | None:
    """Return the child of root whose subtree holds term, if it is a group."""
    owner_id = find_group(tree, root_id, term)
    if owner_id is None or owner_id == root_id:
        return None
    top_id = owner_id
    for ancestor_id in tree.ancestors(owner_id):
        if ancestor_id == root_id:
            return top_id
        top_id = ancestor_id
    return None


def check_invariants(tree: SelectionTree) -> list[str]:
    """Return a description of every structural invariant the tree violates."""
    problems: list[str] = []
    parents: dict[NodeId, NodeId] = {}
    for node in tree.walk():
        if not isinstance(node, Group):
            continue
        if node.id != tree.root_id and not node.children:
            problems.append(f"group {node.id} is empty")
        ranks = [rank_key(tree.rank(child_id)) for child_id in node.children]
        if any(later < earlier for earlier, later in zip(ranks, ranks[1:])):
            problems.append(f"group {node.id} children are not sorted")
        for child_id in node.children:
            if child_id in parents:
                problems.append(f"node {child_id} has two parents ({parents[child_id]}, {node.id})")
            parents[child_id] = node.id
            if tree.node(child_id).parent != node.id:
                problems.append(f"node {child_id} parent link does not point to {node.id}")
    return problems
