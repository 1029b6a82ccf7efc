import pytest

from domain.codec import format_weight, render_display, serialize
from domain.selection import group, insert, set_weight


@pytest.mark.parametrize(
    ("weight", "expected"),
    [(1.3, "1.3"), (2.0, "2"), (0.75, "0.75"), (-0.5, "-0.5"), (1, "1")],
)
def test_format_weight(weight, expected) -> None:
    assert format_weight(weight) == expected


def test_empty_tree_serializes_to_empty_string(tree) -> None:
    assert serialize(tree) == ""


def test_leaf_renders_output_text(tree, pick) -> None:
    pick("kitchen")
    leaf_id = tree.group(tree.root.children[0]).children[0]
    assert serialize(tree, leaf_id) == "kitchen"


def test_weighted_singleton_keeps_brackets(tree, pick) -> None:
    pick("park")
    set_weight(tree, tree.root.children[0], 0.8)
    assert serialize(tree) == "(park:0.8)"


def test_weight_on_root_is_rendered(tree, pick) -> None:
    pick("masterpiece", "best quality")
    set_weight(tree, tree.root_id, 2)
    assert serialize(tree) == "(masterpiece, best quality:2)"


def test_single_group_child_is_bracketed(tree, taxonomy) -> None:
    inner = tree.new_group()
    outer = tree.new_group()
    insert(
        tree,
        inner.id,
        tree.new_leaf(taxonomy.find_by_output_text("masterpiece")).id,
        tree.new_leaf(taxonomy.find_by_output_text("best quality")).id,
    )
    insert(tree, outer.id, inner.id)
    insert(tree, tree.root_id, outer.id)

    assert serialize(tree) == "((masterpiece, best quality))"


def test_single_leaf_child_is_not_bracketed(tree, taxonomy) -> None:
    g = tree.new_group()
    insert(tree, g.id, tree.new_leaf(taxonomy.find_by_output_text("indoors")).id)
    insert(tree, tree.root_id, g.id)
    assert serialize(tree) == "indoors"


def test_render_display_uses_display_text(tree, pick) -> None:
    masterpiece, best, _ = pick("masterpiece", "best quality", "park")
    composite_id = group(tree, tree.root_id, masterpiece, best)
    set_weight(tree, composite_id, 1.1)

    assert render_display(tree) == "[傑作, 最高傑作:1.1], 公園"
