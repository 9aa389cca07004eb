"""
Timing state for the transition engine.

Progress through a segment is measured either in wall-clock seconds since the
segment started or, in frame-by-frame mode, in rendered frames at a target frame
rate. Frame-by-frame mode makes offline capture deterministic: every rendered
frame advances the animation by exactly ``1 / target_fps`` seconds.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class TransitionClock:
    """Mutable clock state. Not thread-safe; the engine lock guards it."""
    start_time: float = 0.0
    pending_pause: float = 0.0
    frame_by_frame: bool = False
    target_fps: int = 60
    rendered_frames: int = 0
    # Active pause window: progress is held at hold_elapsed until hold_until
    hold_until: Optional[float] = None
    hold_elapsed: float = 0.0

    def restart(self, now: float) -> None:
        """Begin a new transition sequence at ``now``."""
        self.start_time = now
        self.rendered_frames = 0
        self.hold_until = None

    def request_pause(self, duration: float) -> bool:
        """Record a pause applied at the next tick; replaces an unapplied one."""
        if not (duration > 0.0 and math.isfinite(duration)):
            return False
        self.pending_pause = float(duration)
        return True

    def apply_pending_pause(self, now: float) -> float:
        """Shift the time origin forward by the pending pause and clear it.

        Progress is held where it was at ``now`` until the pause has elapsed,
        then continues from the same point.
        """
        pause = self.pending_pause
        if pause <= 0.0:
            return 0.0

        elapsed = self.wall_elapsed(now)
        self.start_time = now - elapsed + pause
        self.hold_elapsed = elapsed
        self.hold_until = now + pause
        self.pending_pause = 0.0
        logger.debug(f"Holding animation for {pause:.3f}s at {elapsed:.3f}s into the segment")
        return pause

    def wall_elapsed(self, now: float) -> float:
        """Seconds into the current segment, honouring an active pause window."""
        if self.hold_until is not None:
            if now < self.hold_until:
                return self.hold_elapsed
            self.hold_until = None
        return max(0.0, now - self.start_time)

    def time_fraction(self, now: float, segment_duration: float) -> float:
        """Elapsed fraction of a segment; counts one frame per call in frame mode."""
        if self.frame_by_frame:
            fraction = self.rendered_frames / (self.target_fps * segment_duration)
            self.rendered_frames += 1
            return fraction
        return self.wall_elapsed(now) / segment_duration

    def elapsed(self, now: float) -> float:
        """Seconds of segment progress without consuming a frame."""
        if self.frame_by_frame:
            return self.rendered_frames / float(self.target_fps)
        return self.wall_elapsed(now)

    def advance(self, finished_duration: float) -> None:
        """Move the origin to the start of the next segment."""
        self.start_time += finished_duration
        self.rendered_frames = 0
        self.hold_until = None
