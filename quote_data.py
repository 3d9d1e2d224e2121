# =========================================================
# quote_data.py — Quote Generator — CONTENT CORE
#
# DESIGN RULES:
# 1) Catalog is read-only:
#    - loaded once at import, keys normalized (trim + lower)
#    - values are tuples, mapping is a MappingProxyType
#
# 2) Lookup never fails for unknown topics:
#    - blank topic -> ValidationError (before touching the catalog)
#    - unknown / empty entry -> Empty(NOT_FOUND_MESSAGE)
#    - hit -> Selected(up to 3 quotes, no repeats)
#
# 3) Drop-in API:
#    - lookup(topic, catalog, rng=None, k=3) -> Selected | Empty
#    - submit(topic, catalog, rng=None) -> Selected | Empty | Invalid
#    - load_catalog(path) / build_catalog(mapping) -> QuoteCatalog
#    - normalize_topic(topic) -> str
# =========================================================

from __future__ import annotations

import json
import os
import random
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from loguru import logger

# =========================================================
# CONSTANTS
# =========================================================

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "data" / "quotes.json"
CATALOG_ENV_VAR = "QUOTEGEN_CATALOG"

SAMPLE_SIZE = 3

QUICK_TOPICS: Tuple[str, ...] = ("motivation", "life", "love", "success", "happiness", "wisdom")

HEADLINES: Tuple[str, ...] = (
    "Quote Generator",
    "Inspiring Words",
    "Find Your Quote",
    "Wisdom Awaits",
)

NOT_FOUND_MESSAGE = 'No quotes found for this topic. Try "motivation", "life", or "love".'
EMPTY_TOPIC_MESSAGE = "Please enter a topic to find quotes."
IDLE_MESSAGE = "Enter a topic to discover inspiring quotes."

QuoteCatalog = Mapping[str, Tuple[str, ...]]

_default_rng = random.Random()

# =========================================================
# ERRORS
# =========================================================

class QuoteGenError(Exception):
    """Base error for the quote generator."""


class ValidationError(QuoteGenError, ValueError):
    def __init__(self, reason: str = "empty topic"):
        super().__init__(reason)
        self.reason = reason


class CatalogError(QuoteGenError):
    """The quote dataset is unreadable or not an object of string -> list of strings."""

# =========================================================
# RESULTS
# =========================================================

@dataclass(frozen=True)
class Selected:
    quotes: Tuple[str, ...]

@dataclass(frozen=True)
class Empty:
    message: str = NOT_FOUND_MESSAGE

@dataclass(frozen=True)
class Invalid:
    reason: str
    message: str = EMPTY_TOPIC_MESSAGE

Result = Union[Selected, Empty, Invalid]

# =========================================================
# NORMALIZATION
# =========================================================

def normalize_topic(topic: Optional[str]) -> str:
    return (topic or "").strip().lower()

# =========================================================
# CATALOG
# =========================================================

def build_catalog(raw: Any, *, source: str = "<memory>") -> QuoteCatalog:
    """
    Validates a decoded JSON document and freezes it into a QuoteCatalog.

    - raw must be a dict of str -> list[str]
    - keys are normalized; two keys that collapse to the same topic are rejected
    - quotes are stripped, blank quotes dropped, authored order kept
    """
    if not isinstance(raw, dict):
        raise CatalogError(f"{source}: expected an object of topic -> quotes, got {type(raw).__name__}")

    out: Dict[str, Tuple[str, ...]] = {}
    for key, quotes in raw.items():
        if not isinstance(key, str):
            raise CatalogError(f"{source}: topic keys must be strings, got {key!r}")
        topic = normalize_topic(key)
        if not topic:
            raise CatalogError(f"{source}: blank topic key {key!r}")
        if topic in out:
            raise CatalogError(f"{source}: duplicate topic {topic!r}")
        if not isinstance(quotes, list) or not all(isinstance(q, str) for q in quotes):
            raise CatalogError(f"{source}: topic {topic!r} must map to a list of strings")
        out[topic] = tuple(q.strip() for q in quotes if q.strip())

    return MappingProxyType(out)


def load_catalog(path: Union[str, Path, None] = None) -> QuoteCatalog:
    p = Path(path) if path else DEFAULT_CATALOG_PATH
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise CatalogError(f"{p}: {e}") from e

    catalog = build_catalog(raw, source=str(p))
    logger.info(
        "Loaded quote catalog {} ({} topics, {} quotes)",
        p.name, len(catalog), sum(len(v) for v in catalog.values()),
    )
    return catalog


def catalog_stats(catalog: QuoteCatalog) -> Dict[str, int]:
    return {k: len(v) for k, v in catalog.items()}

# =========================================================
# LOOKUP & SAMPLING
# =========================================================

def lookup(
    topic: Optional[str],
    catalog: QuoteCatalog,
    *,
    rng: Optional[random.Random] = None,
    k: int = SAMPLE_SIZE,
) -> Union[Selected, Empty]:
    """
    Returns up to k quotes for topic, drawn without replacement.

    - topic is trimmed and lower-cased, then matched exactly
    - rng is a python random.Random (deterministic when seeded); the default
      is a module-level Random seeded from os.urandom
    - raises ValidationError for blank input, never for unknown topics
    """
    key = normalize_topic(topic)
    if not key:
        raise ValidationError("empty topic")

    candidates = catalog.get(key) or ()
    if not candidates:
        logger.debug("No quotes for topic {!r}", key)
        return Empty()

    # partial Fisher-Yates: no repeats, fresh order per call
    picked = (rng or _default_rng).sample(candidates, min(k, len(candidates)))
    logger.debug("Picked {} of {} quotes for topic {!r}", len(picked), len(candidates), key)
    return Selected(quotes=tuple(picked))


def submit(
    topic: Optional[str],
    catalog: QuoteCatalog,
    *,
    rng: Optional[random.Random] = None,
) -> Result:
    """One form submission: lookup with the validation failure folded into Invalid."""
    try:
        return lookup(topic, catalog, rng=rng)
    except ValidationError as e:
        return Invalid(reason=e.reason)

# =========================================================
# DEFAULT CATALOG (loaded once)
# =========================================================

CATALOG: QuoteCatalog = load_catalog(os.environ.get(CATALOG_ENV_VAR) or None)
