"""Selection tree: an arena of Leaf and Group nodes addressed by sequential ids."""

from collections.abc import Iterator
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from domain.taxonomy.models import Term

NodeId = int


class Leaf(BaseModel):
    """Selected term. Never mutated; replaced when its term is regrouped."""

    kind: Literal["leaf"] = "leaf"
    id: NodeId
    term: Term
    parent: NodeId | None = None


class Group(BaseModel):
    """Composite node owning an ordered list of child ids and an optional weight."""

    kind: Literal["group"] = "group"
    id: NodeId
    children: list[NodeId] = Field(default_factory=list)
    weight: float | None = None
    parent: NodeId | None = None


SelectionNode = Annotated[Leaf | Group, Field(discriminator="kind")]


class SelectionTree:
    """
    Arena owning every node of one composition.

    The root group is created with the tree, has no parent and is never pruned.
    Parent links are node ids; the arena is the only owner of node objects.
    """

    def __init__(self) -> None:
        self._nodes: dict[NodeId, Leaf | Group] = {}
        self._next_id: NodeId = 0
        self.root_id: NodeId = self.new_group().id

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def _allocate(self) -> NodeId:
        node_id = self._next_id
        self._next_id += 1
        return node_id

    def new_leaf(self, term: Term) -> Leaf:
        leaf = Leaf(id=self._allocate(), term=term)
        self._nodes[leaf.id] = leaf
        return leaf

    def new_group(self, weight: float | None = None) -> Group:
        group = Group(id=self._allocate(), weight=weight)
        self._nodes[group.id] = group
        return group

    def node(self, node_id: NodeId) -> Leaf | Group:
        return self._nodes[node_id]

    def group(self, node_id: NodeId) -> Group:
        node = self._nodes[node_id]
        if not isinstance(node, Group):
            raise TypeError(f"Node {node_id} is a {node.kind}, not a group")
        return node

    @property
    def root(self) -> Group:
        return self.group(self.root_id)

    def discard(self, node_id: NodeId) -> None:
        """Drop a detached node and its whole subtree from the arena."""
        node = self._nodes.pop(node_id)
        if isinstance(node, Group):
            for child_id in node.children:
                self.discard(child_id)

    def ancestors(self, node_id: NodeId) -> Iterator[NodeId]:
        """Yield the ids of the node's parents, nearest first, up to the root."""
        seen: set[NodeId] = {node_id}
        parent = self._nodes[node_id].parent
        while parent is not None:
            if parent in seen:
                raise ValueError(f"Cycle in parent chain of node {node_id}")
            seen.add(parent)
            yield parent
            parent = self._nodes[parent].parent

    def rank(self, node_id: NodeId) -> tuple[int, ...]:
        """Effective rank: a leaf's term rank, or the rank of a group's first child."""
        node = self._nodes[node_id]
        while isinstance(node, Group):
            if not node.children:
                return ()
            node = self._nodes[node.children[0]]
        return node.term.rank

    def walk(self, node_id: NodeId | None = None) -> Iterator[Leaf | Group]:
        """Depth-first, pre-order traversal starting at node_id (default: root)."""
        node = self._nodes[self.root_id if node_id is None else node_id]
        yield node
        if isinstance(node, Group):
            for child_id in node.children:
                yield from self.walk(child_id)

    def iter_terms(self, node_id: NodeId | None = None) -> Iterator[Term]:
        for node in self.walk(node_id):
            if isinstance(node, Leaf):
                yield node.term

    def contains(self, term: Term) -> bool:
        return any(t.rank == term.rank for t in self.iter_terms())
