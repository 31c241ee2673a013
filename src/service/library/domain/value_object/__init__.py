from src.service.library.domain.value_object.time_slot import TimeSlot, overlaps


__all__ = ['TimeSlot', 'overlaps']
