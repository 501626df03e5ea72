from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems nobody else references alive.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float (seconds)


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS_RAW = "mouse_press_raw"          # payload: x, y, button (pixels, y down from board top)
EVENT_MOUSE_RELEASE_RAW = "mouse_release_raw"      # payload: x, y, button
EVENT_TILE_PRESS = "tile_press"                    # payload: col, row
EVENT_TILE_RELEASE = "tile_release"                # payload: col, row


# ============================================================================
# SWAP
# ============================================================================
EVENT_TILE_SWAP_REQUEST = "tile_swap_request"      # payload: src=(c,r), dst=(c,r)
EVENT_TILE_SWAP_STARTED = "tile_swap_started"      # payload: src=(c,r), dst=(c,r)
EVENT_TILE_SWAP_REJECTED = "tile_swap_rejected"    # payload: src=(c,r), dst=(c,r), reason=str
EVENT_TILE_SWAP_FINALIZE = "tile_swap_finalize"    # payload: src=(c,r), dst=(c,r)
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"      # payload: src=(c,r), dst=(c,r)
EVENT_TILE_SWAP_CANCELLED = "tile_swap_cancelled"  # payload: src=(c,r), dst=(c,r), reason=str


# ============================================================================
# BOARD RESOLUTION
# ============================================================================
EVENT_MATCH_FOUND = "match_found"                  # payload: positions=[(c,r),...], size=int
EVENT_COLUMN_DROPPED = "column_dropped"            # payload: col=int, moved=int, spawned=[rows], distance=float
EVENT_TILES_SETTLED = "tiles_settled"              # payload: positions=[(c,r),...]
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, positions=[(c,r),...]
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int
EVENT_BOARD_INVARIANT_VIOLATED = "board_invariant_violated"  # payload: col=int, violations=[str]
