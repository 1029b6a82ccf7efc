import logging

import pytest

from application import PromptSession
from domain.selection import check_invariants


@pytest.fixture
def session(taxonomy) -> PromptSession:
    return PromptSession(taxonomy)


def _terms(session: PromptSession, *refs: str):
    return [session.resolve(r) for r in refs]


def test_prompt_text_follows_every_mutation(session) -> None:
    masterpiece, best = _terms(session, "masterpiece", "best quality")

    session.pick(best)
    assert session.prompt_text == "best quality"
    session.pick(masterpiece)
    assert session.prompt_text == "masterpiece, best quality"

    assert session.group([masterpiece, best]) is True
    assert session.prompt_text == "(masterpiece, best quality)"

    assert session.set_weight(best, 1.3) is True
    assert session.prompt_text == "(masterpiece, best quality:1.3)"
    assert session.display_text == "[傑作, 最高傑作:1.3]"

    session.unpick(masterpiece)
    assert session.prompt_text == "(best quality:1.3)"
    assert check_invariants(session.tree) == []


def test_group_requires_two_selected_terms(session) -> None:
    masterpiece, park = _terms(session, "masterpiece", "park")
    session.pick(masterpiece)

    assert session.group([masterpiece, park]) is False
    assert session.prompt_text == "masterpiece"


def test_group_counts_a_repeated_term_once(session) -> None:
    (masterpiece,) = _terms(session, "masterpiece")
    session.pick(masterpiece)

    assert session.group([masterpiece, masterpiece]) is False
    assert session.prompt_text == "masterpiece"
    assert check_invariants(session.tree) == []


def test_refresh_logs_action_context(session, caplog) -> None:
    (masterpiece,) = _terms(session, "masterpiece")

    with caplog.at_level(logging.DEBUG, logger="application.session"):
        session.pick(masterpiece)

    assert any("'action': 'pick'" in record.getMessage() for record in caplog.records)


def test_toggle_flips_selection(session) -> None:
    (park,) = _terms(session, "park")
    assert session.toggle(park) is True
    assert session.is_selected(park)
    assert session.toggle(park) is False
    assert session.selected_terms() == []
    assert session.prompt_text == ""


def test_unpick_unselected_term_is_noop(session) -> None:
    (park,) = _terms(session, "park")
    assert session.unpick(park) is False


def test_set_weight_needs_selected_term(session) -> None:
    (park,) = _terms(session, "park")
    assert session.set_weight(park, 1.5) is False


def test_unweight(session) -> None:
    (park,) = _terms(session, "park")
    session.pick(park)
    session.set_weight(park, 0.9)
    assert session.prompt_text == "(park:0.9)"
    session.set_weight(park, None)
    assert session.prompt_text == "park"


def test_ungroup(session) -> None:
    masterpiece, best, park = _terms(session, "masterpiece", "best quality", "park")
    for term in (masterpiece, best, park):
        session.pick(term)
    session.group([masterpiece, park])
    assert session.prompt_text == "(masterpiece, park), best quality"

    session.ungroup([park])
    assert session.prompt_text == "masterpiece, best quality, park"


def test_import_merges_and_reports_unknown_tokens(session) -> None:
    (park,) = _terms(session, "park")
    session.pick(park)

    report = session.import_text("(indoors, kitchen:1.2), park, unicorn")

    assert [t.output_text for t in report.added] == ["indoors", "kitchen"]
    assert report.unresolved == ["unicorn"]
    assert session.prompt_text == "(indoors, kitchen:1.2), park"


def test_clear(session) -> None:
    session.import_text("masterpiece, park")
    session.clear()
    assert session.prompt_text == ""
    assert session.selected_terms() == []
