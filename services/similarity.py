"""
Normalized edit-distance similarity for ingredient names.

Two grocery mentions count as the same item when their similarity reaches
the matcher threshold (0.8 by default): "onion" and "onions" score 0.83 and
group together, while "tomato"/"potato" (two substitutions, 0.67) stay apart.
Longer plurals can fall short too ("tomato"/"tomatoes" scores 0.75).
"""

DEFAULT_SIMILARITY_THRESHOLD = 0.8


def levenshtein_distance(a: str, b: str) -> int:
    """Insert/delete/substitute edit distance over code points (no transpositions)"""
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + cost,
            ))
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """1 - distance / longest length; 1.0 for two empty strings, 0.0 if only one is empty"""
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    return 1.0 - levenshtein_distance(a, b) / max(len(a), len(b))


class SimilarityMatcher:
    """Threshold test used when deduplicating grocery names"""

    def __init__(self, threshold: float = DEFAULT_SIMILARITY_THRESHOLD):
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"Similarity threshold must be between 0 and 1, got {threshold}")
        self.threshold = threshold

    def similarity(self, a: str, b: str) -> float:
        return similarity(a, b)

    def matches(self, a: str, b: str) -> bool:
        return a == b or similarity(a, b) >= self.threshold
