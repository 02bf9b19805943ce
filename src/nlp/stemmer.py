# src/nlp/stemmer.py — v1
"""Porter stemmer expressed as ordered suffix-rewrite rule tables.

Each step is a tuple of ``SuffixRule`` entries evaluated top-to-bottom.
The first rule whose pattern matches decides the step: if its measure
condition holds on the stem the word is rewritten, otherwise the word is
left as is and later rules of the same step are not tried.

Character classes follow Porter (1980): ``y`` counts as a vowel except at
the start of a word, where it is temporarily uppercased so that it falls
outside every vowel class.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Callable, NamedTuple

from codexindex.nlp.normalizer import normalize

# Consonant / vowel building blocks.
_c = "[^aeiou]"
_v = "[aeiouy]"
_C = _c + "[^aeiouy]*"
_V = _v + "[aeiou]*"

_MGR0 = re.compile(f"^({_C})?{_V}{_C}")
_MEQ1 = re.compile(f"^({_C})?{_V}{_C}({_V})?$")
_MGR1 = re.compile(f"^({_C})?{_V}{_C}{_V}{_C}")
_HAS_VOWEL = re.compile(f"^({_C})?{_v}")
_SHORT_WORD = re.compile(f"^{_C}{_v}[^aeiouwxy]$")

_STEP1B_RESTORE_E = re.compile(r"(at|bl|iz)$")
_STEP1B_DOUBLE = re.compile(r"([^aeiouylsz])\1$")

MIN_STEM_LENGTH = 3

STEP2_SUFFIXES: dict[str, str] = {
    "ational": "ate",
    "tional": "tion",
    "enci": "ence",
    "anci": "ance",
    "izer": "ize",
    "bli": "ble",
    "alli": "al",
    "entli": "ent",
    "eli": "e",
    "ousli": "ous",
    "ization": "ize",
    "ation": "ate",
    "ator": "ate",
    "alism": "al",
    "iveness": "ive",
    "fulness": "ful",
    "ousness": "ous",
    "aliti": "al",
    "iviti": "ive",
    "biliti": "ble",
    "logi": "log",
}

STEP3_SUFFIXES: dict[str, str] = {
    "icate": "ic",
    "ative": "",
    "alize": "al",
    "iciti": "ic",
    "ical": "ic",
    "ful": "",
    "ness": "",
}

STEP4_SUFFIXES: tuple[str, ...] = (
    "al", "ance", "ence", "er", "ic", "able", "ible", "ant", "ement",
    "ment", "ent", "ou", "ism", "ate", "iti", "ous", "ive", "ize",
)


# --- Measure predicates ---


def measure_gt0(stem: str) -> bool:
    """m > 0."""
    return _MGR0.search(stem) is not None


def measure_eq1(stem: str) -> bool:
    """m == 1."""
    return _MEQ1.search(stem) is not None


def measure_gt1(stem: str) -> bool:
    """m > 1."""
    return _MGR1.search(stem) is not None


def contains_vowel(stem: str) -> bool:
    return _HAS_VOWEL.search(stem) is not None


def is_short_word(stem: str) -> bool:
    """Consonant-vowel-consonant stem whose last letter is not w, x or y."""
    return _SHORT_WORD.search(stem) is not None


def _always(stem: str) -> bool:
    return True


# --- Rule table machinery ---


class SuffixRule(NamedTuple):
    """One ``(pattern, condition-on-measure, replacement)`` rewrite.

    ``pattern`` must fully match the word and expose the retained part as
    the ``stem`` group; ``rewrite`` receives that stem and the match.
    """

    pattern: re.Pattern[str]
    condition: Callable[[str], bool]
    rewrite: Callable[[str, re.Match[str]], str]


def _keep_stem(stem: str, match: re.Match[str]) -> str:
    return stem


def _suffix_table_rule(
    table: dict[str, str], condition: Callable[[str], bool]
) -> SuffixRule:
    alternatives = "|".join(table)
    return SuffixRule(
        pattern=re.compile(f"(?P<stem>.+?)(?P<suffix>{alternatives})"),
        condition=condition,
        rewrite=lambda stem, match: stem + table[match.group("suffix")],
    )


def _tidy_after_ed_ing(stem: str, match: re.Match[str]) -> str:
    """Repair the stem left behind once ``ed``/``ing`` is removed."""
    if _STEP1B_RESTORE_E.search(stem):
        return stem + "e"
    if _STEP1B_DOUBLE.search(stem):
        return stem[:-1]
    if is_short_word(stem):
        return stem + "e"
    return stem


def _drop_final_e(stem: str) -> bool:
    return measure_gt1(stem) or (measure_eq1(stem) and not is_short_word(stem))


STEP1A: tuple[SuffixRule, ...] = (
    SuffixRule(re.compile(r"(?P<stem>.+?(?:ss|i))es"), _always, _keep_stem),
    SuffixRule(re.compile(r"(?P<stem>.+?[^s])s"), _always, _keep_stem),
)

STEP1B: tuple[SuffixRule, ...] = (
    SuffixRule(
        re.compile(r"(?P<stem>.+?)eed"),
        measure_gt0,
        lambda stem, match: stem + "ee",
    ),
    SuffixRule(re.compile(r"(?P<stem>.+?)(?:ed|ing)"), contains_vowel, _tidy_after_ed_ing),
)

STEP1C: tuple[SuffixRule, ...] = (
    SuffixRule(
        re.compile(r"(?P<stem>.+?)y"),
        contains_vowel,
        lambda stem, match: stem + "i",
    ),
)

STEP2: tuple[SuffixRule, ...] = (_suffix_table_rule(STEP2_SUFFIXES, measure_gt0),)

STEP3: tuple[SuffixRule, ...] = (_suffix_table_rule(STEP3_SUFFIXES, measure_gt0),)

STEP4: tuple[SuffixRule, ...] = (
    SuffixRule(
        re.compile(f"(?P<stem>.+?)(?:{'|'.join(STEP4_SUFFIXES)})"),
        measure_gt1,
        _keep_stem,
    ),
    SuffixRule(re.compile(r"(?P<stem>.+?[st])ion"), measure_gt1, _keep_stem),
)

STEP5A: tuple[SuffixRule, ...] = (
    SuffixRule(re.compile(r"(?P<stem>.+?)e"), _drop_final_e, _keep_stem),
)

# The measure of "xll" equals the measure of "xl", so testing the stem is
# equivalent to testing the whole word.
STEP5B: tuple[SuffixRule, ...] = (
    SuffixRule(re.compile(r"(?P<stem>.+l)l"), measure_gt1, _keep_stem),
)

STEPS: tuple[tuple[SuffixRule, ...], ...] = (
    STEP1A, STEP1B, STEP1C, STEP2, STEP3, STEP4, STEP5A, STEP5B,
)


def apply_step(word: str, rules: tuple[SuffixRule, ...]) -> str:
    """Apply one step's rule table to ``word`` with early exit."""
    for rule in rules:
        match = rule.pattern.fullmatch(word)
        if match is None:
            continue
        stem = match.group("stem")
        if rule.condition(stem):
            return rule.rewrite(stem, match)
        return word
    return word


@lru_cache(maxsize=16384)
def stem(word: str) -> str:
    """Reduce an English word to its Porter stem.

    Words shorter than three characters, or without any vowel, are
    returned unchanged.
    """
    if len(word) < MIN_STEM_LENGTH:
        return word
    if not re.search("[aeiouy]", word):
        return word

    leading_y = word[0] == "y"
    if leading_y:
        word = "Y" + word[1:]

    for rules in STEPS:
        word = apply_step(word, rules)

    if leading_y:
        word = "y" + word[1:]
    return word


def stem_term(term: str) -> str:
    """Normalize a vocabulary term and stem it.

    Hyphenated compounds are stemmed part by part and rejoined, so
    ``"hands-on"`` becomes ``"hand-on"`` rather than a single stem.
    """
    normalized = normalize(term)
    if not normalized:
        return ""
    if "-" in normalized:
        return "-".join(stem(part) for part in normalized.split("-"))
    return stem(normalized)
