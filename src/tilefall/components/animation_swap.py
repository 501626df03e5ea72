from dataclasses import dataclass
from typing import Tuple


@dataclass(slots=True)
class SwapAnimation:
    src: Tuple[int, int]  # (col, row)
    dst: Tuple[int, int]
    duration: float
    elapsed: float = 0.0
    phase: str = 'forward'  # 'forward' or 'reverse'

    @property
    def progress(self) -> float:
        """Fraction of the way from src to dst, 0..1."""
        p = self.elapsed / self.duration
        if p < 0.0:
            return 0.0
        if p > 1.0:
            return 1.0
        return p
