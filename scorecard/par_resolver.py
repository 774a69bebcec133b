from typing import List, Optional, Sequence

from models import DEFAULT_PAR, HOLES, HoleRecord, TeeBox


def resolve_pars(tee_box: Optional[TeeBox]) -> List[int]:
    """Per-hole par for holes 1-18; every hole is a par 4 without a tee box."""
    if tee_box is None:
        return [DEFAULT_PAR] * HOLES
    return tee_box.pars


def apply_pars(holes: Sequence[HoleRecord], tee_box: Optional[TeeBox]) -> None:
    """Layer tee-box par onto existing holes in place.

    Only ``par`` changes; entered scores, putts and fairway outcomes are left
    exactly as they were.
    """
    pars = resolve_pars(tee_box)
    if len(holes) != len(pars):
        raise ValueError(f"Expected {len(pars)} holes, got {len(holes)}")
    for hole, par in zip(holes, pars):
        if hole.par != par:
            hole.par = par
