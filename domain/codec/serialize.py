"""Render a selection tree as weighted, parenthesized prompt text."""

from collections.abc import Callable

from domain.selection.nodes import Group, Leaf, NodeId, SelectionTree
from domain.taxonomy.models import Term


def format_weight(weight: float) -> str:
    """Render a weight the way prompt syntax expects (``2`` rather than ``2.0``)."""
    if float(weight).is_integer():
        return str(int(weight))
    return repr(float(weight))


def needs_brackets(tree: SelectionTree, group: Group) -> bool:
    if group.weight is not None:
        return True
    if group.parent is None:
        return False
    if len(group.children) > 1:
        return True
    return len(group.children) == 1 and isinstance(tree.node(group.children[0]), Group)


def _render(
    tree: SelectionTree,
    node_id: NodeId,
    label: Callable[[Term], str],
    brackets: tuple[str, str],
) -> str:
    match tree.node(node_id):
        case Leaf(term=term):
            return label(term)
        case Group(children=children, weight=weight) as group:
            body = ", ".join(_render(tree, child_id, label, brackets) for child_id in children)
            if weight is not None:
                body = f"{body}:{format_weight(weight)}"
            if needs_brackets(tree, group):
                return f"{brackets[0]}{body}{brackets[1]}"
            return body
        case other:
            raise TypeError(f"Unexpected node type: {type(other)}")


def serialize(tree: SelectionTree, node_id: NodeId | None = None) -> str:
    """
    Serialize a node (default: the root) to prompt text.

    Examples:
        ``masterpiece, best quality``
        ``(masterpiece, best quality)``
        ``(masterpiece, best quality:1.3)``
    """
    return _render(tree, tree.root_id if node_id is None else node_id, lambda t: t.output_text, ("(", ")"))


def render_display(tree: SelectionTree, node_id: NodeId | None = None) -> str:
    """Same layout as serialize, using display text and square brackets."""
    return _render(tree, tree.root_id if node_id is None else node_id, lambda t: t.display_text, ("[", "]"))
