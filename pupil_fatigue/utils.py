"""Small numeric helpers shared by the processing modules."""
from __future__ import annotations

import numpy as np


def round_half_up(value: float, decimals: int = 0) -> float:
    """Round with .5 always going up (Python's round() rounds half to even)."""
    factor = 10.0 ** decimals
    return float(np.floor(value * factor + 0.5) / factor)
