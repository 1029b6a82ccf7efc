import pytest

from domain.selection import SelectionTree, add_term
from domain.taxonomy import Taxonomy, parse_taxonomy_tree

SAMPLE_TAXONOMY = {
    "Basics": {
        "Quality": [
            ["傑作", "masterpiece"],
            ["最高傑作", "best quality"],
            ["高画質", "high quality"],
        ],
        "Style": [
            ["写実的", "photorealistic"],
            ["アニメ風", "anime style"],
        ],
    },
    "Scene": {
        "Indoors": [
            ["屋内", "indoors"],
            ["キッチン", "kitchen"],
        ],
        "Outdoors": [
            ["屋外", "outdoors"],
            ["公園", "park"],
            ["台所", "kitchen"],  # duplicate output text, later rank
        ],
    },
}


@pytest.fixture
def sample_taxonomy_data() -> dict:
    return SAMPLE_TAXONOMY


@pytest.fixture
def taxonomy() -> Taxonomy:
    return parse_taxonomy_tree(SAMPLE_TAXONOMY)


@pytest.fixture
def tree() -> SelectionTree:
    return SelectionTree()


@pytest.fixture
def pick(tree: SelectionTree, taxonomy: Taxonomy):
    """Select terms by output text and return them."""

    def _pick(*outputs: str):
        terms = [taxonomy.find_by_output_text(o) for o in outputs]
        for term in terms:
            add_term(tree, term)
        return terms

    return _pick
