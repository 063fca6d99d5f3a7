"""Team name normalization for matching.

Sources spell the same team differently: accents, double-encoded UTF-8,
club-type prefixes ("CN", "Club Natació") and local-language city names.
normalize_team_name() reduces all of that to one comparable form:
- Fixes mojibake (double-encoded UTF-8)
- Strips diacritics (unidecode), lowercases, punctuation becomes spaces
- Applies cross-language translations (münchen -> munich)
- Removes organizational words that vary by source, not by identity
"""

import logging
import re
from functools import lru_cache

from unidecode import unidecode

from resultmatch.utilities.constants import (
    MOJIBAKE_PATTERNS,
    NAME_TRANSLATIONS,
    ORGANIZATIONAL_WORDS,
)

logger = logging.getLogger(__name__)

# Longest first so "club natacio" goes before "club"
_MULTI_WORD_ORGS = sorted((w for w in ORGANIZATIONAL_WORDS if " " in w), key=len, reverse=True)
_SINGLE_WORD_ORGS = frozenset(w for w in ORGANIZATIONAL_WORDS if " " not in w)

_TRANSLATION_PATTERNS = [
    (re.compile(r"\b" + re.escape(variant) + r"\b"), canonical)
    for variant, canonical in sorted(NAME_TRANSLATIONS.items(), key=lambda kv: len(kv[0]), reverse=True)
]


def fix_mojibake(text: str) -> str:
    """Fix common mojibake patterns from double-encoded UTF-8."""
    if not text:
        return text

    result = text
    for pattern, replacement in MOJIBAKE_PATTERNS:
        result = result.replace(pattern, replacement)

    if result != text:
        logger.debug("[MOJIBAKE] Fixed: '%s' -> '%s'", text[:40], result[:40])

    return result


def apply_translations(text: str) -> str:
    """Replace local-language spellings with their canonical form.

    Expects text that is already unidecoded and lowercased.
    """
    for pattern, canonical in _TRANSLATION_PATTERNS:
        text = pattern.sub(canonical, text)
    return text


def strip_organizational_words(text: str) -> str:
    """Remove club-type words ("cn", "club natacio", "fc") from a name.

    "cn barcelona" -> "barcelona"
    "club natacio sabadell" -> "sabadell"
    "barcelona cn" -> "barcelona"

    If nothing would be left, the input is returned unchanged so a team
    literally named "Club" still has a name.
    """
    stripped = f" {text} "
    for phrase in _MULTI_WORD_ORGS:
        stripped = stripped.replace(f" {phrase} ", " ")

    words = [w for w in stripped.split() if w not in _SINGLE_WORD_ORGS]
    if not words:
        return text
    return " ".join(words)


@lru_cache(maxsize=4096)
def normalize_team_name(raw: str | None) -> str:
    """Normalize a raw team name into its canonical comparable form.

    Args:
        raw: Team name as it appears in a source or in a question

    Returns:
        Normalized lowercase name, or "" for empty input

    Examples:
        >>> normalize_team_name("CN Barcelona")
        'barcelona'
        >>> normalize_team_name("Club Natació  Sabadell")
        'sabadell'
        >>> normalize_team_name("Bayern München")
        'bayern munich'
    """
    if not raw:
        return ""

    text = fix_mojibake(raw)
    text = unidecode(text).lower()

    # Punctuation becomes spaces ("C.N." -> "c n "), apostrophes vanish
    text = text.replace("'", "")
    text = re.sub(r"[^\w\s]", " ", text)
    text = " ".join(text.split())

    # "c n barcelona" -> "cn barcelona" for dotted abbreviations
    text = re.sub(r"\b(\w) (?=\w\b)", r"\1", text)

    text = apply_translations(text)
    normalized = strip_organizational_words(text)

    logger.debug("[NORMALIZE] '%s' -> '%s'", raw[:60], normalized[:60])
    return normalized
