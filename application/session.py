"""Prompt composition session: the use cases behind every user action."""

import logging
from collections.abc import Iterable

from pydantic import BaseModel, Field

from domain.codec import parse_prompt, rebuild_tree, render_display, serialize, unresolved_tokens
from domain.selection import (
    SelectionTree,
    add_term,
    find_group,
    group,
    remove_term,
    set_weight,
    top_level_group,
    ungroup,
)
from domain.taxonomy import Taxonomy, Term
from infrastructure.observability import clear_action_context, get_log_context, set_log_context

logger = logging.getLogger(__name__)


class ImportReport(BaseModel):
    """Outcome of importing prompt text into a session."""

    added: list[Term] = Field(default_factory=list)
    unresolved: list[str] = Field(default_factory=list)


class PromptSession:
    """
    One user's in-memory composition.

    Owns a SelectionTree built from terms of a shared, read-only Taxonomy and
    re-serializes the prompt text after every mutation.
    """

    def __init__(self, taxonomy: Taxonomy) -> None:
        self.taxonomy = taxonomy
        self.tree = SelectionTree()
        self.prompt_text = ""
        self.display_text = ""

    def _refresh(self, action: str) -> None:
        self.prompt_text = serialize(self.tree)
        self.display_text = render_display(self.tree)
        logger.debug("%s -> %r (context=%s)", action, self.prompt_text, get_log_context())
        clear_action_context()

    def resolve(self, ref: str) -> Term | None:
        return self.taxonomy.resolve(ref)

    def selected_terms(self) -> list[Term]:
        return list(self.tree.iter_terms())

    def is_selected(self, term: Term) -> bool:
        return self.tree.contains(term)

    def pick(self, term: Term) -> None:
        set_log_context(action="pick")
        add_term(self.tree, term)
        logger.info("Picked %r", term.output_text)
        self._refresh("pick")

    def unpick(self, term: Term) -> bool:
        set_log_context(action="unpick")
        removed = remove_term(self.tree, term)
        if removed:
            logger.info("Unpicked %r", term.output_text)
        self._refresh("unpick")
        return removed

    def toggle(self, term: Term) -> bool:
        """Pick an unselected term or unpick a selected one; returns the new state."""
        if self.is_selected(term):
            self.unpick(term)
            return False
        self.pick(term)
        return True

    def group(self, terms: Iterable[Term]) -> bool:
        """
        Group the given selected terms.

        Requires at least two selected terms; otherwise nothing happens and
        False is returned (the action is disabled in that state).
        """
        # a term repeated in the request counts once
        eligible = list({t.rank: t for t in terms if self.is_selected(t)}.values())
        if len(eligible) < 2:
            logger.info("Group needs at least two selected terms (got %d)", len(eligible))
            return False
        set_log_context(action="group")
        group(self.tree, self.tree.root_id, *eligible)
        logger.info("Grouped %s", [t.output_text for t in eligible])
        self._refresh("group")
        return True

    def ungroup(self, terms: Iterable[Term]) -> None:
        set_log_context(action="ungroup")
        terms = list(terms)
        ungroup(self.tree, self.tree.root_id, *terms)
        logger.info("Ungrouped %s", [t.output_text for t in terms])
        self._refresh("ungroup")

    def set_weight(self, term: Term, weight: float | None) -> bool:
        """
        Weight (or, with None, un-weight) the top-level item containing term.

        Returns False if the term is not selected.
        """
        target_id = top_level_group(self.tree, self.tree.root_id, term)
        if target_id is None:
            target_id = find_group(self.tree, self.tree.root_id, term)
        if target_id is None:
            return False
        set_log_context(action="weight")
        set_weight(self.tree, target_id, weight)
        logger.info("Set weight %s on item containing %r", weight, term.output_text)
        self._refresh("weight")
        return True

    def clear(self) -> None:
        set_log_context(action="clear")
        self.tree = SelectionTree()
        self._refresh("clear")

    def import_text(self, text: str) -> ImportReport:
        """Parse prompt text and merge its terms into the current selection."""
        set_log_context(action="import")
        items = parse_prompt(text, self.taxonomy)
        added = rebuild_tree(self.tree, items)
        unresolved = unresolved_tokens(text, self.taxonomy)
        if unresolved:
            logger.warning("Ignored %d unknown token(s): %s", len(unresolved), unresolved)
        logger.info("Imported %d new term(s)", len(added))
        self._refresh("import")
        return ImportReport(added=added, unresolved=unresolved)
