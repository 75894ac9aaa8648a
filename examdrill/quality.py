"""Map a raw answer event onto the 0-5 SM-2 quality scale."""

# Slower than this counts as hesitation, faster as instant recall
SLOW_ANSWER_MS = 30000
FAST_ANSWER_MS = 5000

PASS_QUALITY = 3

_INCORRECT_QUALITY = {"high": 2, "medium": 1, "low": 0}
_CORRECT_BASE_QUALITY = {"high": 5, "medium": 4, "low": 3}


def score(was_correct: bool, confidence: str, time_spent_ms: int) -> int:
    """
    Convert an answer into a quality value.
    
    A confident wrong answer scores higher than a guess (a fixable
    misconception) but always stays below the pass threshold. A correct
    answer never drops below the pass threshold, whatever the timing.
    
    Args:
        was_correct: Whether the selected answers matched the key
        confidence: Self-reported confidence ("low", "medium", "high")
        time_spent_ms: Time taken to answer in milliseconds
    
    Returns:
        Quality in 0-5 (0=total miss, 5=fast confident recall)
    """
    if not was_correct:
        return _INCORRECT_QUALITY.get(confidence, 0)
    
    base = _CORRECT_BASE_QUALITY.get(confidence, PASS_QUALITY)
    if time_spent_ms > SLOW_ANSWER_MS:
        adjustment = -1
    elif time_spent_ms < FAST_ANSWER_MS:
        adjustment = 1
    else:
        adjustment = 0
    
    return max(PASS_QUALITY, min(5, base + adjustment))
