"""Build a Taxonomy from a pre-loaded nested mapping."""

from collections.abc import Mapping, Sequence
from typing import Any

from domain.taxonomy.models import Category, Taxonomy, Term


def _parse_terms(entries: Sequence[Any], rank: tuple[int, ...], path: tuple[str, ...]) -> list[Term]:
    terms: list[Term] = []
    for i, entry in enumerate(entries):
        if isinstance(entry, (str, bytes)) or not isinstance(entry, Sequence) or len(entry) != 2:
            raise ValueError(f"Term #{i} in {'/'.join(path)} must be a [display, output] pair, got {entry!r}")
        display_text, output_text = entry
        if not isinstance(display_text, str) or not isinstance(output_text, str):
            raise ValueError(f"Term #{i} in {'/'.join(path)} must contain two strings, got {entry!r}")
        terms.append(
            Term(
                display_text=display_text.strip(),
                output_text=output_text.strip(),
                rank=(*rank, i),
                category=path,
            )
        )
    return terms


def _parse_category(node: Any, name: str | None, rank: tuple[int, ...], path: tuple[str, ...]) -> Category:
    if isinstance(node, Mapping):
        subcategories = [
            _parse_category(child, str(key), (*rank, i), (*path, str(key)))
            for i, (key, child) in enumerate(node.items())
        ]
        return Category(name=name, rank=rank, subcategories=subcategories)
    if isinstance(node, Sequence) and not isinstance(node, (str, bytes)):
        return Category(name=name, rank=rank, terms=_parse_terms(node, rank, path))
    raise ValueError(f"Category {'/'.join(path) or '<root>'} must be a mapping or a list of terms, got {type(node)}")


def parse_taxonomy_tree(data: Mapping[str, Any]) -> Taxonomy:
    """
    Parse a nested mapping into a Taxonomy object.

    This is a pure function - it does NOT perform file I/O.
    The YAML/JSON loading happens in infrastructure.config.loader.

    Args:
        data: Mapping of category name -> sub-mapping or list of [display, output] pairs.
            Sibling order at every level defines term rank.

    Returns:
        Taxonomy with ranks assigned in declaration order

    Raises:
        ValueError: If a node is neither a mapping nor a list of pairs
    """
    if not isinstance(data, Mapping):
        raise ValueError(f"Taxonomy root must be a mapping, got {type(data)}")
    return Taxonomy(root=_parse_category(data, None, (), ()))
