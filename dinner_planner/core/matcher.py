"""Approximate matching of recipe ingredients against the pantry.

Names are normalized and compared with a normalized Levenshtein similarity.
Besides the whole names, the shorter name is compared against every run of
the same number of words in the longer one, so "chicken" finds
"chicken breast" and "red onions" finds "onion".  A match needs a relative
edit distance no greater than the threshold (default 0.3):

    tomato / tomatoes    distance 0.25  -> match
    brocoli / broccoli   distance 0.125 -> match
    chicken / chickpeas  distance 0.33  -> no match
"""

from typing import Optional

from rapidfuzz.distance import Levenshtein

from dinner_planner.config import get_settings
from dinner_planner.core.ingredients import normalize
from dinner_planner.models import PantryItem

# Keeps an exact-threshold distance (e.g. 3 edits over 10 chars) a match.
_EPSILON = 1e-9


def _windows(words: list[str], size: int) -> list[str]:
    return [" ".join(words[i:i + size]) for i in range(len(words) - size + 1)]


def similarity(a: str, b: str) -> float:
    """Best similarity (0-1) between two normalized names, whole or by word runs."""
    if not a or not b:
        return 0.0
    best = Levenshtein.normalized_similarity(a, b)
    a_words, b_words = a.split(" "), b.split(" ")
    if len(a_words) != len(b_words):
        short, long_ = (a_words, b_words) if len(a_words) < len(b_words) else (b_words, a_words)
        query = " ".join(short)
        for window in _windows(long_, len(short)):
            best = max(best, Levenshtein.normalized_similarity(query, window))
    return best


class PantryIndex:
    """Search index over the names of one pantry snapshot.

    Items without a usable name are not indexed.  The index holds no state
    beyond the snapshot it was built from; build a new one when the pantry
    changes.
    """

    def __init__(self, pantry: list[PantryItem], threshold: Optional[float] = None):
        if threshold is None:
            threshold = get_settings().match_threshold
        self.threshold = threshold
        self._entries = []
        for item in pantry:
            key = normalize(getattr(item, "name", None))
            if key:
                self._entries.append((key, item))

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, ingredient_name: str) -> list[PantryItem]:
        """Return every pantry item that matches the ingredient, best match first.

        Ties on the word-run score go to the closer whole name, so "chicken"
        ranks "chicken" ahead of "chicken stock".
        """
        query = normalize(ingredient_name)
        if not query:
            return []
        cutoff = 1.0 - self.threshold - _EPSILON
        scored = []
        for key, item in self._entries:
            score = similarity(query, key)
            if score >= cutoff:
                scored.append((score, Levenshtein.normalized_similarity(query, key), item))
        scored.sort(key=lambda entry: (entry[0], entry[1]), reverse=True)
        return [item for _, _, item in scored]

    def contains(self, ingredient_name: str) -> bool:
        return bool(self.lookup(ingredient_name))


def is_available(ingredient_name: str, pantry: list[PantryItem], threshold: Optional[float] = None) -> bool:
    """True if the pantry holds something close enough to the ingredient name."""
    return PantryIndex(pantry, threshold).contains(ingredient_name)
