"""Fuzzy string matching for team names.

Uses rapidfuzz for fast, maintenance-free fuzzy matching.
Scores are on a 0-100 scale; inputs are expected to be normalized
already (see resultmatch.consumers.matching.normalizer).
"""

from rapidfuzz import fuzz


class TeamNameMatcher:
    """Fuzzy scorer for normalized team names.

    Stateless, so one instance can be shared between concurrent
    matching runs.
    """

    def similarity(self, a: str, b: str) -> float:
        """Score two normalized names.

        Exact equality is always 100. Otherwise the better of plain edit
        distance and token-sorted edit distance, so word order
        ("barcelona cn" vs "cn barcelona") costs nothing while spelling
        differences still count.

        No partial or token-set scoring: both give 90+ when one name is
        contained in the other ("barcelona" in "atletic barceloneta").

        Returns:
            Score in [0, 100], rounded to one decimal
        """
        if not a or not b:
            return 0.0
        if a == b:
            return 100.0
        scores = [
            fuzz.ratio(a, b),
            fuzz.token_sort_ratio(a, b),
        ]
        return round(max(scores), 1)


def similarity(a: str, b: str) -> float:
    """Score two normalized team names on a 0-100 scale."""
    return TeamNameMatcher().similarity(a, b)
