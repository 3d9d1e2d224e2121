# =========================================================
# app.py — Quote Generator
# Single page Streamlit build:
# - topic field + quick topics -> quote_data.submit
# - up to 3 quote cards on generated backdrops (particles, meteors, glow)
# - rotating headline (one step per rerun)
# - Reset returns to idle
# =========================================================

from __future__ import annotations

import html
import os
import sys
from collections import OrderedDict
from typing import Optional

import streamlit as st
from loguru import logger

import card_art as ca

# =========================================================
# CONFIG
# =========================================================
APP_TITLE = "Quote Generator"
APP_ICON = "💬"

ENV = os.environ.get("QUOTEGEN_ENV", "dev").strip().lower()
LOG_LEVEL = "INFO" if ENV == "prod" else "DEBUG"

CARD_W, CARD_H = 720, 220
CARD_PARTICLES = 60
CARD_METEORS = 6
MAX_CARD_CACHE = 64  # per-session LRU entries

# =========================================================
# LOGGING
# =========================================================
logger.remove()
logger.add(sys.stderr, level=LOG_LEVEL)

# =========================================================
# QUOTE CATALOG (guarded import)
# =========================================================
try:
    import quote_data as qd
except Exception as e:
    qd = None
    _QD_IMPORT_ERROR = str(e)
    logger.error("Quote catalog unavailable: {}", e)
else:
    _QD_IMPORT_ERROR = ""

# =========================================================
# STATE TRANSITIONS (run as widget callbacks, before the rerun renders)
# =========================================================
def _run_lookup(topic: str) -> None:
    result = qd.submit(topic, qd.CATALOG)
    st.session_state.result = result
    if isinstance(result, qd.Selected):
        st.session_state.shown_topic = qd.normalize_topic(topic)
        st.session_state.topic = ""

def _on_submit() -> None:
    _run_lookup(st.session_state.get("topic", ""))

def _on_quick_topic(option: str) -> None:
    st.session_state.topic = option
    _run_lookup(option)

def _on_reset() -> None:
    st.session_state.topic = ""
    st.session_state.result = None
    st.session_state.shown_topic = ""

# =========================================================
# CARDS
# =========================================================
def _get_backdrop_cached(seed: int) -> bytes:
    cache: "OrderedDict[tuple[int, int, int], bytes]" = st.session_state.setdefault("card_cache", OrderedDict())
    key = (int(seed), CARD_W, CARD_H)
    if key in cache:
        cache.move_to_end(key)
        return cache[key]
    out = ca.render_card_backdrop(seed, CARD_W, CARD_H, particles=CARD_PARTICLES, meteors=CARD_METEORS)
    cache[key] = out
    cache.move_to_end(key)
    while len(cache) > MAX_CARD_CACHE:
        cache.popitem(last=False)
    return out

def _card_html(title: Optional[str], body: str, seed: int, *, muted: bool = False) -> str:
    uri = ca.backdrop_data_uri(_get_backdrop_cached(seed))
    body_color = "#d1d5db" if muted else "#ffffff"
    head = (
        f"<div style='font-size:1.25rem; font-weight:600; color:#ffffff; letter-spacing:.08em;'>{html.escape(title)}</div>"
        if title else ""
    )
    return (
        f"<div style=\"background-image:url('{uri}'); background-size:cover; background-position:center;"
        " border-radius:12px; padding:24px; margin:0 0 18px 0; box-shadow:0 10px 25px rgba(0,0,0,.35);\">"
        f"{head}"
        f"<p style='color:{body_color}; font-style:italic; font-size:1rem; margin:8px 0 0 0;'>{html.escape(body)}</p>"
        "</div>"
    )

# =========================================================
# UI
# =========================================================
st.set_page_config(page_title=APP_TITLE, layout="centered", page_icon=APP_ICON)

st.session_state.setdefault("topic", "")
st.session_state.setdefault("result", None)
st.session_state.setdefault("shown_topic", "")
st.session_state.setdefault("headline_idx", 0)
if "card_cache" not in st.session_state:
    st.session_state.card_cache = OrderedDict()

if qd is None:
    st.error("The quote catalog could not be loaded. Fix the quote catalog first.")
    st.code(_QD_IMPORT_ERROR or "Unknown import error", language="text")
    st.stop()

headline = qd.HEADLINES[st.session_state.headline_idx % len(qd.HEADLINES)]
st.session_state.headline_idx += 1
st.markdown(f"<h1 style='text-align:center; font-family:serif;'>{html.escape(headline)}</h1>", unsafe_allow_html=True)

result = st.session_state.result

with st.container(border=True):
    with st.form("quote_form", clear_on_submit=False, border=False):
        st.text_input("Topic", key="topic", placeholder="Enter a topic", label_visibility="collapsed")
        if isinstance(result, qd.Invalid):
            st.error(result.message)
        b1, b2 = st.columns(2)
        with b1:
            st.form_submit_button("Get Quotes", key="get_quotes", on_click=_on_submit)
        with b2:
            st.form_submit_button("Reset", key="reset", on_click=_on_reset)

    quick_cols = st.columns(len(qd.QUICK_TOPICS))
    for col, option in zip(quick_cols, qd.QUICK_TOPICS):
        with col:
            st.button(
                option.capitalize(),
                key=f"quick_{option}",
                on_click=_on_quick_topic,
                args=(option,),
            )

if isinstance(result, qd.Selected):
    topic = st.session_state.shown_topic
    for i, quote in enumerate(result.quotes, 1):
        st.markdown(_card_html(f"Quote {i}", quote, ca.stable_seed(f"{i}|{quote}")), unsafe_allow_html=True)
    st.caption(f"Topic: {topic.title()}")
elif isinstance(result, qd.Empty):
    st.markdown(_card_html(None, result.message, ca.stable_seed("empty"), muted=True), unsafe_allow_html=True)
else:
    st.markdown(
        f"<p style='text-align:center; font-size:1.1rem; font-weight:500;'>{html.escape(qd.IDLE_MESSAGE)}</p>",
        unsafe_allow_html=True,
    )

st.markdown("<div style='text-align:center; color:grey;'>Inspiring Words © 2026</div>", unsafe_allow_html=True)
