from domain.codec import parse_prompt, rebuild_tree, scan_prompt, serialize, unresolved_tokens
from domain.selection import SelectionTree, group


def _rebuild(taxonomy, text: str, tree: SelectionTree | None = None) -> SelectionTree:
    tree = tree or SelectionTree()
    rebuild_tree(tree, parse_prompt(text, taxonomy))
    return tree


def test_scan_groups_one_paren_span() -> None:
    tokens = scan_prompt("(a, b:1.2), c")
    assert [t.text for t in tokens] == ["a", "b", "c"]
    assert [t.group_id for t in tokens] == [1, 1, None]
    assert [t.weight for t in tokens] == [1.2, 1.2, None]


def test_scan_assigns_sequential_span_ids() -> None:
    tokens = scan_prompt("(a, b), c, (d, e:-0.5)")
    assert [t.group_id for t in tokens] == [1, 1, None, 2, 2]
    assert tokens[-1].weight == -0.5


def test_scan_flattens_nested_parens() -> None:
    tokens = scan_prompt("((a, b:1.1), c:1.2), d")
    assert [t.text for t in tokens] == ["a", "b", "c", "d"]
    assert [t.group_id for t in tokens] == [1, 1, 1, None]
    assert [t.weight for t in tokens] == [1.2, 1.2, 1.2, None]


def test_scan_tolerates_unbalanced_parens() -> None:
    assert [(t.text, t.group_id) for t in scan_prompt("a), b")] == [("a", None), ("b", None)]

    unclosed = scan_prompt("x, (a, b:2")
    assert [(t.text, t.group_id, t.weight) for t in unclosed] == [("x", None, None), ("a", 1, 2.0), ("b", 1, 2.0)]


def test_scan_skips_empty_tokens() -> None:
    assert [t.text for t in scan_prompt(" a,, ,b , ")] == ["a", "b"]
    assert scan_prompt("") == []


def test_parse_drops_unknown_tokens(taxonomy) -> None:
    items = parse_prompt("masterpiece, unicorn, Park", taxonomy)
    assert [i.term.output_text for i in items] == ["masterpiece"]
    assert unresolved_tokens("masterpiece, unicorn, Park", taxonomy) == ["unicorn", "Park"]


def test_parse_resolves_duplicate_output_to_first_term(taxonomy) -> None:
    (item,) = parse_prompt("kitchen", taxonomy)
    assert item.term.rank == (1, 0, 1)


def test_import_round_trips_weighted_group(taxonomy) -> None:
    text = "(indoors, kitchen:1.2), park"
    assert serialize(_rebuild(taxonomy, text)) == text


def test_import_reorders_into_taxonomy_order(taxonomy) -> None:
    tree = _rebuild(taxonomy, "park, (kitchen, masterpiece)")
    assert serialize(tree) == "(masterpiece, kitchen), park"


def test_import_single_term_span_keeps_weight(taxonomy) -> None:
    assert serialize(_rebuild(taxonomy, "(park:0.8), masterpiece")) == "masterpiece, (park:0.8)"


def test_weights_round_trip_numerically(taxonomy) -> None:
    tree = _rebuild(taxonomy, "(masterpiece, best quality:1.30)")
    (composite_id,) = tree.root.children
    assert tree.group(composite_id).weight == 1.3
    assert serialize(tree) == "(masterpiece, best quality:1.3)"


def test_serialize_parse_round_trip(tree, pick, taxonomy) -> None:
    masterpiece, _, photo, _, _ = pick("masterpiece", "best quality", "photorealistic", "indoors", "park")
    group(tree, tree.root_id, masterpiece, photo)
    text = serialize(tree)
    assert text == "(masterpiece, photorealistic), best quality, indoors, park"

    assert serialize(_rebuild(taxonomy, text)) == text


def test_import_skips_terms_already_selected(tree, pick, taxonomy) -> None:
    pick("masterpiece")
    added = rebuild_tree(tree, parse_prompt("(masterpiece, best quality), best quality", taxonomy))

    assert [t.output_text for t in added] == ["best quality"]
    assert serialize(tree) == "masterpiece, best quality"
