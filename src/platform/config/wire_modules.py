"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.library.app.command import (
    decide_borrow_request_use_case,
    decide_reservation_use_case,
    submit_borrow_request_use_case,
    submit_reservation_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    submit_reservation_use_case,
    decide_reservation_use_case,
    submit_borrow_request_use_case,
    decide_borrow_request_use_case,
]
