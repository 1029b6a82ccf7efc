"""Replay parsed prompt items into a selection tree."""

import logging
from itertools import groupby

from domain.codec.parse import ParsedItem
from domain.selection.nodes import SelectionTree
from domain.selection.ops import add_term, find_group, group, set_weight
from domain.taxonomy.models import Term

logger = logging.getLogger(__name__)


def rebuild_tree(tree: SelectionTree, items: list[ParsedItem]) -> list[Term]:
    """
    Insert parsed items into tree and regroup them by span.

    Terms already in the tree (or repeated in items) are skipped. A span with
    two or more new terms becomes one group carrying the span weight; a span
    with a single new term puts the weight on that term's singleton.

    Returns:
        The terms that were newly added, in item order.
    """
    added: list[Term] = []
    spans: list[tuple[list[Term], float | None]] = []

    for group_id, span_items in groupby(items, key=lambda item: item.group_id):
        span_items = list(span_items)
        new_terms: list[Term] = []
        for item in span_items:
            if tree.contains(item.term):
                logger.debug("Skipping duplicate term %r", item.term.output_text)
                continue
            add_term(tree, item.term)
            new_terms.append(item.term)
        added.extend(new_terms)
        if group_id is not None and new_terms:
            spans.append((new_terms, span_items[0].weight))

    for terms, weight in spans:
        if len(terms) > 1:
            target_id = group(tree, tree.root_id, *terms)
        else:
            target_id = find_group(tree, tree.root_id, terms[0])
        if target_id is not None and weight is not None:
            set_weight(tree, target_id, weight)

    logger.debug("Rebuilt %d term(s) into %d group(s)", len(added), len(spans))
    return added
