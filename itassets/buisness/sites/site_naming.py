"""
Site Naming
Derives 4-character site prefixes from free-text site names.

The tokenizer turns "Clínica de la Sabana" into ["CLINICA", "SABANA"]; the
candidate generator turns tokens into an ordered list of prefixes, the
natural abbreviation first and progressively wider company fragments after.
"""

import re
import unicodedata
from typing import List

STOP_WORDS = frozenset({'DE', 'DEL', 'LA', 'LAS', 'LOS', 'Y', 'E', 'EN', 'EL', 'AL'})

PREFIX_LENGTH = 4
PAD_CHAR = 'X'
EMPTY_PREFIX = PAD_CHAR * PREFIX_LENGTH

PREFIX_PATTERN = re.compile(r'^[A-Z0-9]{4}$')
_NON_ALNUM = re.compile(r'[^A-Z0-9]')


def _strip_diacritics(text: str) -> str:
    decomposed = unicodedata.normalize('NFD', text)
    return ''.join(ch for ch in decomposed if not unicodedata.combining(ch))


def tokenize_site_name(name: str) -> List[str]:
    """
    Split a site name into its meaningful uppercase words.

    Diacritics are stripped, characters outside [A-Z0-9] removed from each
    word, and empty words and stop-words dropped. Order and duplicates are kept.
    """
    words = _strip_diacritics(name or '').upper().split()
    tokens = (_NON_ALNUM.sub('', word) for word in words)
    return [token for token in tokens if token and token not in STOP_WORDS]


def normalize_prefix(value: str) -> str:
    """Uppercase, keep [A-Z0-9], pad with X and cut to exactly 4 characters"""
    cleaned = _NON_ALNUM.sub('', (value or '').upper())
    return cleaned.ljust(PREFIX_LENGTH, PAD_CHAR)[:PREFIX_LENGTH]


def primary_prefix(tokens: List[str]) -> str:
    """The natural abbreviation: initials of the leading words plus the start of the last one"""
    if not tokens:
        return EMPTY_PREFIX
    if len(tokens) == 1:
        return (tokens[0][:PREFIX_LENGTH] + EMPTY_PREFIX)[:PREFIX_LENGTH]

    last = tokens[-1]
    initials = ''.join(token[0] for token in tokens[:-1])[:3]
    remaining = max(1, PREFIX_LENGTH - len(initials))
    last_part = (last[:remaining] + EMPTY_PREFIX)[:remaining]
    return (initials + last_part)[:PREFIX_LENGTH]


def _fallback_prefixes(tokens: List[str]) -> List[str]:
    first, last = tokens[0], tokens[-1]
    # "Company Site" names may borrow the whole company word
    lengths = (1, 2, 3, 4) if len(tokens) == 2 else (1, 2, 3)
    return [
        normalize_prefix(first[:length] + last[:max(0, PREFIX_LENGTH - length)])
        for length in lengths
    ]


def generate_prefix_candidates(name: str) -> List[str]:
    """
    Ordered, de-duplicated prefix candidates for a site name, best first.

    Every candidate matches ^[A-Z0-9]{4}$.
    """
    tokens = tokenize_site_name(name)
    if not tokens:
        return [EMPTY_PREFIX]

    candidates = [primary_prefix(tokens)] + _fallback_prefixes(tokens)

    seen = set()
    ordered = []
    for candidate in candidates:
        if candidate in seen or not PREFIX_PATTERN.match(candidate):
            continue
        seen.add(candidate)
        ordered.append(candidate)
    return ordered
