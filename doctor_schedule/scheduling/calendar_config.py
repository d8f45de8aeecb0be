from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CalendarConfig:
    """Daily window shown by the day and week calendars."""

    start_hour: int = 8
    end_hour: int = 18
    slot_duration_minutes: int = 30
    label_format: str = "%I:%M %p"

    def __post_init__(self) -> None:
        if not 0 <= self.start_hour < self.end_hour <= 24:
            raise ValueError(
                f"Invalid calendar window {self.start_hour}-{self.end_hour}: "
                "expected 0 <= start_hour < end_hour <= 24"
            )
        if self.slot_duration_minutes <= 0:
            raise ValueError("slot_duration_minutes must be positive")

    @property
    def window_minutes(self) -> int:
        return (self.end_hour - self.start_hour) * 60

    @property
    def slots_per_day(self) -> int:
        # only exact for durations dividing the window evenly
        return self.window_minutes // self.slot_duration_minutes

    def format_label(self, moment: datetime) -> str:
        label = moment.strftime(self.label_format)
        if self.label_format.startswith("%I"):
            label = label.lstrip("0")
        return label


DEFAULT_CALENDAR_CONFIG = CalendarConfig()
