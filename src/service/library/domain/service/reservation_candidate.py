"""
Boundary validation for reservation candidates.

Runs before any repository call and reports every problem at once, so a
client can fix a form in a single round trip.
"""

from datetime import date

import attrs

from src.platform.exception.exceptions import ValidationError
from src.service.library.domain.value_object.time_slot import TimeSlot


@attrs.define(frozen=True)
class ReservationCandidate:
    table_id: int
    seat_number: int
    reserved_date: date
    time_slot: TimeSlot


def validate_reservation_candidate(
    *,
    table_id: int,
    seat_number: int,
    reserved_date: date,
    start_time: str,
    end_time: str,
    today: date,
    seat_number_min: int,
    seat_number_max: int,
) -> ReservationCandidate:
    errors: list[str] = []

    time_slot: TimeSlot | None = None
    try:
        time_slot = TimeSlot.parse(start_time, end_time)
    except ValidationError as e:
        errors.extend(e.errors)

    if isinstance(seat_number, bool) or not isinstance(seat_number, int):
        errors.append('Seat number must be an integer')
    elif seat_number < seat_number_min:
        errors.append(f'Seat number must be at least {seat_number_min}')
    elif seat_number > seat_number_max:
        errors.append(f'Seat number cannot exceed {seat_number_max}')

    if not isinstance(reserved_date, date):
        errors.append('Reserved date is required')
    elif reserved_date < today:
        errors.append('Reserved date cannot be in the past')

    if errors or time_slot is None:
        raise ValidationError.from_errors(errors)

    return ReservationCandidate(
        table_id=table_id,
        seat_number=seat_number,
        reserved_date=reserved_date,
        time_slot=time_slot,
    )
