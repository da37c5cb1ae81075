from __future__ import annotations

import logging
import re
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from tracklang.constants import FULL_BASE, LANGUAGE_ALIASES, PARTIAL_PENALTY
from tracklang.utils import Logger

log = Logger.getLogger("language")

# Every known two- or three-letter code mapped to its two-letter form.
CANONICAL_CODES: Mapping[str, str] = MappingProxyType({
    **{three: two for two, three in LANGUAGE_ALIASES},
    **{two: two for two, _ in LANGUAGE_ALIASES}
})


class Match(Enum):
    NONE = 0
    PARTIAL = 1
    FULL = 2


def normalize_primary(code: str) -> str:
    """
    Get the form a primary language subtag is compared by.

    Known ISO 639-1 and ISO 639-2 (T and B) codes are canonicalized to the
    ISO 639-1 code, everything else is just lower-cased.

    Example:
        >>> normalize_primary("FRE")
        'fr'
        >>> normalize_primary("gsw")
        'gsw'
    """
    code = code.lower()
    return CANONICAL_CODES.get(code, code)


def split_tag(tag: Any) -> list[str]:
    """Split a language tag into its subtags. Absent or empty tags have none."""
    if not tag or not isinstance(tag, str):
        return []
    return tag.split("-")


def common_prefix_length(a: Sequence[str], b: Sequence[str]) -> int:
    """Count the leading subtags two tags agree on, with the primary subtag alias-normalized."""
    length = 0
    for i, (x, y) in enumerate(zip(a, b)):
        if i == 0:
            if normalize_primary(x) != normalize_primary(y):
                break
        elif x.lower() != y.lower():
            break
        length += 1
    return length


def classify(preference: Any, candidate: Any) -> Match:
    """
    Classify how a single preferred tag covers a candidate tag.

    FULL when every subtag of the candidate is matched, which includes a
    candidate more general than the preference (gsw-u against gsw-u-sd-chzh).
    PARTIAL when the base language matches but the tags diverge, or the
    candidate carries subtags the preference never asked for.
    """
    candidate_subtags = split_tag(candidate)
    matched = common_prefix_length(split_tag(preference), candidate_subtags)
    if matched == 0:
        return Match.NONE
    if matched == len(candidate_subtags):
        return Match.FULL
    return Match.PARTIAL


def match_language(preferences: Optional[Iterable[Optional[str]]], candidate: Optional[str]) -> int:
    """
    Score how well a candidate language tag satisfies an ordered preference list.

    A full match against the first preference scores FULL_BASE, each later
    position scores one less. Partial matches score PARTIAL_PENALTY below the
    equivalent full match. 0 means no match at all, and is also the score for
    an absent candidate, an empty preference list, or only absent preferences.

    The classification order only holds for lists shorter than PARTIAL_PENALTY.
    """
    if not candidate or not preferences:
        return 0
    best = 0
    for i, preference in enumerate(preferences):
        if not preference:
            continue
        match = classify(preference, candidate)
        if match == Match.NONE:
            continue
        score = FULL_BASE - i
        if match == Match.PARTIAL:
            score -= PARTIAL_PENALTY
        if log.isEnabledFor(logging.DEBUG):
            log.debug(f"{candidate!r} is a {match.name} match of {preference!r} at position {i}, score {score}")
        best = max(best, score)
    return best


score_language_match = match_language


def is_language_match(preferences: Optional[Iterable[Optional[str]]], candidate: Optional[str]) -> bool:
    return match_language(preferences, candidate) > 0


def rank_languages(
    preferences: Optional[Sequence[Optional[str]]], candidates: Iterable[Optional[str]]
) -> list[tuple[Optional[str], int]]:
    """
    Pair each candidate with its score, best first.
    Candidates with equal scores keep their given order.
    """
    scored = [(candidate, match_language(preferences, candidate)) for candidate in candidates]
    return sorted(scored, key=lambda x: x[1], reverse=True)


def best_language(
    preferences: Optional[Sequence[Optional[str]]], candidates: Iterable[Optional[str]]
) -> Optional[str]:
    """Get the best scoring candidate, or None if none of them match at all."""
    ranked = rank_languages(preferences, candidates)
    if not ranked or ranked[0][1] == 0:
        return None
    return ranked[0][0]


def parse_preferences(value: Union[str, Sequence[Any], None]) -> list[str]:
    """
    Get a preference list from a comma or semicolon separated string, or a list of them.
    Anything else, like a number, holds no preferences.

    Example:
        >>> parse_preferences("pt, it;pol")
        ['pt', 'it', 'pol']
        >>> parse_preferences(["ja", "en-US, en"])
        ['ja', 'en-US', 'en']
    """
    if not value:
        return []
    if isinstance(value, str):
        return [x for x in re.split(r"\s*[,;]\s*", value.strip()) if x]
    if not isinstance(value, (list, tuple)):
        return []
    return [x for item in value if isinstance(item, str) for x in parse_preferences(item)]
