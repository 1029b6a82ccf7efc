"""Taxonomy models: categories, terms and first-match lookups."""

from collections.abc import Iterator
from functools import cached_property

from pydantic import BaseModel, ConfigDict, Field


class Term(BaseModel):
    """Single taxonomy entry: a display label paired with its prompt output."""

    model_config = ConfigDict(frozen=True)

    display_text: str
    output_text: str
    rank: tuple[int, ...] = Field(..., description="Sibling-index path from the taxonomy root.")
    category: tuple[str, ...] = Field(default=(), description="Category names from the root.")

    @property
    def id(self) -> str:
        return "-".join(str(i) for i in self.rank)

    def __str__(self) -> str:
        return self.output_text


class Category(BaseModel):
    """Named taxonomy node holding either sub-categories or terms."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    rank: tuple[int, ...] = ()
    subcategories: list["Category"] = Field(default_factory=list)
    terms: list[Term] = Field(default_factory=list)

    def iter_terms(self) -> Iterator[Term]:
        """Yield every term below this category in declaration order."""
        for sub in self.subcategories:
            yield from sub.iter_terms()
        yield from self.terms


class Taxonomy(BaseModel):
    """
    Read-only taxonomy with lookups by id, output text and display text.

    Lookups are case-sensitive and return the first match in traversal order,
    or None when nothing matches. Output text may repeat across categories.
    """

    root: Category = Field(default_factory=Category)

    @cached_property
    def _terms(self) -> list[Term]:
        return list(self.root.iter_terms())

    @cached_property
    def _by_output_text(self) -> dict[str, list[Term]]:
        index: dict[str, list[Term]] = {}
        for term in self._terms:
            index.setdefault(term.output_text, []).append(term)
        return index

    @cached_property
    def _by_display_text(self) -> dict[str, Term]:
        index: dict[str, Term] = {}
        for term in self._terms:
            index.setdefault(term.display_text, term)
        return index

    @cached_property
    def _by_id(self) -> dict[str, Term]:
        return {term.id: term for term in self._terms}

    def all_terms(self) -> Iterator[Term]:
        return iter(self._terms)

    def __len__(self) -> int:
        return len(self._terms)

    def terms_by_output_text(self, text: str) -> list[Term]:
        return list(self._by_output_text.get(text, []))

    def find_by_output_text(self, text: str) -> Term | None:
        matches = self._by_output_text.get(text)
        return matches[0] if matches else None

    def find_by_display_text(self, text: str) -> Term | None:
        return self._by_display_text.get(text)

    def find_by_id(self, term_id: str) -> Term | None:
        return self._by_id.get(term_id)

    def resolve(self, ref: str) -> Term | None:
        """
        Resolve a user-supplied reference to a term.

        Tries the term id first, then output text, then display text.

        Examples:
            >>> taxonomy.resolve("0-0-1").output_text
            'masterpiece'
            >>> taxonomy.resolve("傑作").output_text
            'masterpiece'
        """
        ref = ref.strip()
        return self.find_by_id(ref) or self.find_by_output_text(ref) or self.find_by_display_text(ref)
