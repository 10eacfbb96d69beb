import math
from typing import Callable

from .constants import DEFAULT_RANGE, MIN_SEPARATION_HZ, DragState, Handle
from .coordinate_mapper import clamp_x, freq_to_x, x_to_freq
from .models import FrequencyRange

RangeListener = Callable[[FrequencyRange], None]

class SelectionController:
    """
    Finite state machine for the two band-edge handles of the chart.

    States: NONE -> DRAGGING_START / DRAGGING_END on pointer-down over a
    handle, back to NONE on pointer-up or when the pointer leaves the
    surface. While dragging, pointer x is converted to a frequency and the
    dragged edge is clamped so that `end - start >= min_separation_hz`.
    The range is only ever replaced through `_commit`, so `start < end`
    holds at every observable instant.
    """

    def __init__(self, start: float = DEFAULT_RANGE[0], end: float = DEFAULT_RANGE[1],
                 min_separation_hz: float = MIN_SEPARATION_HZ):
        if min_separation_hz <= 0:
            raise ValueError("min_separation_hz must be positive")
        if not (math.isfinite(start) and math.isfinite(end) and start < end):
            raise ValueError(f"Invalid initial range: {start} - {end}")

        self.min_separation_hz = min_separation_hz
        self.state = DragState.NONE
        self._range = FrequencyRange(start, end)
        self._listeners: list[RangeListener] = []

    @property
    def range(self) -> FrequencyRange:
        return self._range

    @property
    def is_dragging(self) -> bool:
        return self.state != DragState.NONE

    def add_listener(self, callback: RangeListener):
        self._listeners.append(callback)

    # --- Pointer events ---

    def hit_test(self, x: float, width: float, grab_px: float) -> Handle | None:
        """Returns the handle within `grab_px` pixels of x, nearest first."""
        x_start = freq_to_x(self._range.start, width)
        x_end = freq_to_x(self._range.end, width)
        d_start = abs(x - x_start)
        d_end = abs(x - x_end)

        # When the handles overlap on screen, the side of the pointer decides
        if d_end < d_start or (d_end == d_start and x > x_start):
            return Handle.END if d_end <= grab_px else None
        return Handle.START if d_start <= grab_px else None

    def pointer_down(self, handle: Handle):
        match handle:
            case Handle.START:
                self.state = DragState.DRAGGING_START
            case Handle.END:
                self.state = DragState.DRAGGING_END

    def pointer_down_at(self, x: float, width: float, grab_px: float) -> bool:
        handle = self.hit_test(x, width, grab_px)
        if handle is None:
            return False
        self.pointer_down(handle)
        return True

    def pointer_move(self, x: float, width: float) -> float:
        """
        Moves the dragged handle, if any. Returns the frequency under the
        (clamped) pointer so the caller can update its hover readout when
        nothing is being dragged.
        """
        freq = x_to_freq(clamp_x(x, width), width)
        match self.state:
            case DragState.DRAGGING_START:
                self._set_start(freq)
            case DragState.DRAGGING_END:
                self._set_end(freq)
        return freq

    def pointer_up(self):
        self.state = DragState.NONE

    def pointer_leave(self):
        self.state = DragState.NONE

    # --- Direct numeric entry ---

    def set_range(self, start: float, end: float) -> FrequencyRange:
        """
        Applies typed-in values with the same clamp rule as dragging: a changed
        start is bounded by the current end, a changed end by the start.
        Non-finite values are ignored.
        """
        if not (math.isfinite(start) and math.isfinite(end)):
            return self._range

        start_changed = start != self._range.start
        end_changed = end != self._range.end
        if start_changed and not end_changed:
            self._set_start(start)
        elif end_changed and not start_changed:
            self._set_end(end)
        elif start_changed and end_changed:
            new_end = max(end, start + self.min_separation_hz)
            self._commit(start, new_end, moving_end=True)
        return self._range

    def set_start(self, start: float) -> FrequencyRange:
        return self.set_range(start, self._range.end)

    def set_end(self, end: float) -> FrequencyRange:
        return self.set_range(self._range.start, end)

    # --- Internals ---

    def _set_start(self, candidate: float):
        end = self._range.end
        self._commit(min(candidate, end - self.min_separation_hz), end)

    def _set_end(self, candidate: float):
        start = self._range.start
        self._commit(start, max(candidate, start + self.min_separation_hz), moving_end=True)

    def _commit(self, start: float, end: float, moving_end: bool = False):
        # Guard against the separation vanishing in float rounding at huge values
        if not start < end:
            if moving_end:
                end = math.nextafter(start, math.inf)
            else:
                start = math.nextafter(end, -math.inf)

        new_range = FrequencyRange(start, end)
        if new_range == self._range:
            return
        self._range = new_range
        for callback in self._listeners:
            callback(new_range)
