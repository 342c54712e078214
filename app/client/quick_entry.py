"""
Tablet quick entry.

Keypad-driven session entry: pick a player, type the duration digit by
digit (or tap a preset), tap an RPE button, submit.  The session is dated
today and has no notes.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from app.tracker.load import RPE_MAX, RPE_MIN, compute_training_load

MAX_DURATION_DIGITS = 3
QUICK_DURATIONS = (30, 45, 60, 90, 120)


@dataclass(frozen=True)
class QuickEntry:
    player_id: Optional[str] = None
    duration_digits: str = ""
    rpe: Optional[int] = None

    @property
    def duration(self) -> int:
        return int(self.duration_digits) if self.duration_digits else 0

    @property
    def preview_load(self) -> int:
        return compute_training_load(self.duration, self.rpe or 0)

    @property
    def can_submit(self) -> bool:
        return self.player_id is not None and self.duration > 0 and self.rpe is not None

    def select_player(self, player_id: Optional[str]) -> QuickEntry:
        return replace(self, player_id=player_id)

    def press_digit(self, digit: int) -> QuickEntry:
        """Append a digit; ignored once three digits (999 minutes) are entered."""
        if not 0 <= digit <= 9:
            raise ValueError(f"Not a digit: {digit}")
        digits = self.duration_digits.lstrip("0")
        if len(digits) >= MAX_DURATION_DIGITS:
            return self
        digits = (digits + str(digit)).lstrip("0")
        return replace(self, duration_digits=digits)

    def backspace(self) -> QuickEntry:
        return replace(self, duration_digits=self.duration_digits[:-1])

    def set_duration(self, minutes: int) -> QuickEntry:
        """Quick preset button."""
        if minutes < 0 or minutes > 10 ** MAX_DURATION_DIGITS - 1:
            raise ValueError(f"Duration out of range: {minutes}")
        return replace(self, duration_digits=str(minutes) if minutes else "")

    def select_rpe(self, rpe: int) -> QuickEntry:
        if not RPE_MIN <= rpe <= RPE_MAX:
            raise ValueError(f"RPE must be between {RPE_MIN} and {RPE_MAX}: {rpe}")
        return replace(self, rpe=rpe)

    def reset(self) -> QuickEntry:
        return QuickEntry()
