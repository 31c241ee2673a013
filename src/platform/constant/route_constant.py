"""Route prefixes and paths shared by the app factory and the tests."""

RESERVATION_BASE = '/api/reservation'
RESERVATION_MY = f'{RESERVATION_BASE}/my'
RESERVATION_DECIDE = f'{RESERVATION_BASE}/{{reservation_id}}'
RESERVATION_CONFLICTS = f'{RESERVATION_BASE}/{{reservation_id}}/conflicts'

BORROW_REQUEST_BASE = '/api/borrow_request'
BORROW_REQUEST_MY = f'{BORROW_REQUEST_BASE}/my'
BORROW_REQUEST_DECIDE = f'{BORROW_REQUEST_BASE}/{{request_id}}'

TABLE_BASE = '/api/table'

HEALTH = '/health'
METRICS = '/metrics'
