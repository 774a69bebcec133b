from typing import Optional

# Strokes allowed before the green while leaving a standard two-putt.
GIR_MAX_SHOTS_TO_GREEN = 2


def calculate_gir(score: Optional[int], putts: Optional[int]) -> Optional[bool]:
    """Green-in-regulation from a hole's score and putts.

    Returns None (unknown) when either value is unset, otherwise whether
    ``score - putts <= 2``. The threshold does not vary with par: the whole
    application uses this approximation, so a par 3 and a par 5 are judged
    alike.
    """
    if score is None or putts is None:
        return None
    return score - putts <= GIR_MAX_SHOTS_TO_GREEN
