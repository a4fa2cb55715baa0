"""Edit-distance string similarity on a 0-100 scale."""

from rapidfuzz.distance import Levenshtein

from record_dedupe.values import round_half_up


def _normalize(value: str | None) -> str:
    if value is None:
        return ""
    return str(value).strip().lower()


def levenshtein_distance(a: str, b: str) -> int:
    """Classic unit-cost Levenshtein distance (insert, delete, substitute)."""
    return Levenshtein.distance(a, b)


def similarity(a: str | None, b: str | None) -> int:
    """Compare two strings, case-insensitively and ignoring outer whitespace.

    Args:
        a: First string (None is treated as blank)
        b: Second string

    Returns:
        100 for identical normalized strings, 0 if either side is blank,
        otherwise ``100 * (1 - distance / longest length)`` rounded,
        floored at 0 and capped at 99.
    """
    left = _normalize(a)
    right = _normalize(b)
    if not left or not right:
        return 0
    if left == right:
        return 100

    distance = levenshtein_distance(left, right)
    longest = max(len(left), len(right))
    # 100 is reserved for identical strings
    return min(99, max(0, round_half_up(100 * (1 - distance / longest))))
