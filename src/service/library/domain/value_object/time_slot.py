"""
Time Slot Value Object

A half-open interval [start_time, end_time) of wall-clock time within one day.
Times are naive local times; reservations never wrap past midnight.
"""

from datetime import time
import re

import attrs

from src.platform.exception.exceptions import ValidationError


_TIME_OF_DAY_PATTERN = re.compile(r'^([01]?[0-9]|2[0-3]):([0-5][0-9])$')


def parse_time_of_day(raw: str, *, field_name: str = 'time') -> time:
    """Parse 'H:MM' or 'HH:MM' (24-hour clock) into a minute-granularity time."""
    if not isinstance(raw, str):
        raise ValidationError(f'{field_name} must be a string in HH:MM format')
    match = _TIME_OF_DAY_PATTERN.match(raw.strip())
    if not match:
        raise ValidationError(f'{field_name} must be in HH:MM format')
    return time(hour=int(match.group(1)), minute=int(match.group(2)))


@attrs.define(frozen=True)
class TimeSlot:
    """Time Slot (Value Object)"""

    start_time: time
    end_time: time

    def __attrs_post_init__(self) -> None:
        if self.end_time <= self.start_time:
            raise ValidationError('End time must be after start time')

    @classmethod
    def parse(cls, start_time: str, end_time: str) -> 'TimeSlot':
        errors: list[str] = []
        parsed: dict[str, time] = {}
        for field_name, raw in (('start_time', start_time), ('end_time', end_time)):
            try:
                parsed[field_name] = parse_time_of_day(raw, field_name=field_name)
            except ValidationError as e:
                errors.extend(e.errors)
        if errors:
            raise ValidationError.from_errors(errors)
        return cls(start_time=parsed['start_time'], end_time=parsed['end_time'])

    def overlaps(self, other: 'TimeSlot') -> bool:
        return self.start_time < other.end_time and other.start_time < self.end_time

    def __str__(self) -> str:
        return f'{self.start_time:%H:%M}-{self.end_time:%H:%M}'


def overlaps(a: TimeSlot, b: TimeSlot) -> bool:
    return a.overlaps(b)
