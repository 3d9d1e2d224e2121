import os
import sys

import pytest
from streamlit.testing.v1 import AppTest

import quote_data as qd

APP = os.path.join(os.path.dirname(__file__), "..", "app.py")


@pytest.fixture
def at():
    app = AppTest.from_file(APP, default_timeout=30)
    app.run()
    assert not app.exception
    return app


def test_idle_page(at):
    assert at.session_state["result"] is None
    assert any(qd.IDLE_MESSAGE in md.value for md in at.markdown)


def test_submit_topic_shows_three_cards(at):
    at.text_input(key="topic").input(" Life ")
    at.button(key="get_quotes").click()
    at.run()

    result = at.session_state["result"]
    assert isinstance(result, qd.Selected)
    assert len(result.quotes) == 3
    assert set(result.quotes) <= set(qd.CATALOG["life"])
    assert at.text_input(key="topic").value == ""
    for i in (1, 2, 3):
        assert any(f">Quote {i}<" in md.value for md in at.markdown)
    assert at.caption[0].value == "Topic: Life"
    assert not at.get("download_button")


def test_blank_topic_shows_validation_message(at):
    at.text_input(key="topic").input("   ")
    at.button(key="get_quotes").click()
    at.run()

    assert isinstance(at.session_state["result"], qd.Invalid)
    assert at.error[0].value == qd.EMPTY_TOPIC_MESSAGE


def test_unknown_topic_shows_placeholder_and_keeps_input(at):
    at.text_input(key="topic").input("xyz")
    at.button(key="get_quotes").click()
    at.run()

    assert isinstance(at.session_state["result"], qd.Empty)
    assert at.text_input(key="topic").value == "xyz"
    assert any("No quotes found for this topic." in md.value for md in at.markdown)


def test_quick_topic_triggers_lookup(at):
    at.button(key="quick_wisdom").click()
    at.run()

    result = at.session_state["result"]
    assert isinstance(result, qd.Selected)
    assert set(result.quotes) <= set(qd.CATALOG["wisdom"])
    assert at.session_state["shown_topic"] == "wisdom"


def test_reset_returns_to_idle(at):
    at.button(key="quick_love").click()
    at.run()
    assert isinstance(at.session_state["result"], qd.Selected)

    at.button(key="reset").click()
    at.run()
    assert at.session_state["result"] is None
    assert at.session_state["shown_topic"] == ""


def test_headline_cycles_one_step_per_rerun(at):
    assert any(f">{qd.HEADLINES[0]}</h1>" in md.value for md in at.markdown)
    at.run()
    assert any(f">{qd.HEADLINES[1]}</h1>" in md.value for md in at.markdown)


def test_broken_catalog_stops_the_page(monkeypatch, catalog_file):
    bad = catalog_file('{"life": "not a list"}')
    monkeypatch.setenv("QUOTEGEN_CATALOG", str(bad))
    monkeypatch.delitem(sys.modules, "quote_data")

    app = AppTest.from_file(APP, default_timeout=30)
    app.run()

    assert not app.exception
    assert app.error[0].value == "The quote catalog could not be loaded. Fix the quote catalog first."
    assert "must map to a list of strings" in app.code[0].value
    assert len(app.text_input) == 0
