import re
from typing import Optional

from .config import EVAL_CLAMP_CP

EVAL_MARKER = "%eval "

# Lichess writes mates as "#3" / "#-1"; the distance is not used, only the side.
MATE_SCORE_CP = EVAL_CLAMP_CP

_PAWNS_RE = re.compile(r"\s*([-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?)")


def parse_eval(annotation: str) -> Optional[float]:
    """
    Extract the engine evaluation from a PGN comment such as ``[%eval 0.17]``.

    Returns centipawns from White's point of view, or None when the comment
    carries no readable evaluation.
    """
    i = annotation.find(EVAL_MARKER)
    if i == -1:
        return None

    s = annotation[i + len(EVAL_MARKER):]

    if s.startswith("#"):
        if s.startswith("#-"):
            return -MATE_SCORE_CP
        return MATE_SCORE_CP

    match = _PAWNS_RE.match(s)
    if not match:
        return None

    return float(match.group(1)) * 100


def clamp_eval(cp: float, bound: float = EVAL_CLAMP_CP) -> float:
    """Clamp a centipawn score to [-bound, bound]."""
    return max(-bound, min(bound, cp))
