"""Score normalization onto the common 0-100 scale."""


def normalize_score(score: float, score_min: float, score_max: float) -> float:
    """Linearly rescale score from [score_min, score_max] to [0, 100].

    The result is clamped to the target range and rounded to 2 decimals. A
    degenerate scale (score_max == score_min) maps to 100 when the score reaches
    it and 0 otherwise.
    """
    if score_max == score_min:
        return 100.0 if score >= score_max else 0.0
    ratio = (score - score_min) / (score_max - score_min)
    return round(min(max(ratio, 0.0), 1.0) * 100.0, 2)
