"""
Per-cell exemption hooks for overlay data.

Levels in the original game also carry an object/settlement layer that
appears to stop the walk and the smoothing from touching some cells. How
that layer is encoded is not known, so the generator only asks an
optional exemption object whether a cell index is exempt. The default
answer is always "no", which is the documented core algorithm.
"""

import numpy as np
from typing import Optional, Protocol


class CellExemption(Protocol):
    """Capability queried by the generator for each touched cell."""

    def exempt_from_deposit(self, index: int) -> bool:
        ...

    def exempt_from_smoothing(self, index: int) -> bool:
        ...


class NeverExempt:
    """Default exemption: every cell takes deposits and smoothing."""

    def exempt_from_deposit(self, index: int) -> bool:
        return False

    def exempt_from_smoothing(self, index: int) -> bool:
        return False


NEVER_EXEMPT = NeverExempt()


class MaskExemption:
    """
    Exemption backed by boolean masks over the cell indices.

    Args:
        deposit_mask: Cells that receive no deposit (flat or (H, W) shaped)
        smoothing_mask: Cells the smoothing pass leaves unchanged
    """

    def __init__(self, deposit_mask: Optional[np.ndarray] = None,
                 smoothing_mask: Optional[np.ndarray] = None):
        self.deposit_mask = None if deposit_mask is None else np.asarray(deposit_mask, dtype=bool).ravel()
        self.smoothing_mask = None if smoothing_mask is None else np.asarray(smoothing_mask, dtype=bool).ravel()

    def exempt_from_deposit(self, index: int) -> bool:
        return self.deposit_mask is not None and bool(self.deposit_mask[index])

    def exempt_from_smoothing(self, index: int) -> bool:
        return self.smoothing_mask is not None and bool(self.smoothing_mask[index])
