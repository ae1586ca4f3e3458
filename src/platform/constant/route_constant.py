# API Route Constants

# Base API
API_BASE = '/api'

# Auth routes
AUTH_BASE = f'{API_BASE}/auth'
AUTH_REGISTER = f'{AUTH_BASE}/register'
AUTH_LOGIN = f'{AUTH_BASE}/login'
AUTH_PROFILE = f'{AUTH_BASE}/profile'

# Seat routes
SEAT_BASE = f'{API_BASE}/seats'
SEAT_MAP = SEAT_BASE
SEAT_SELECT = f'{SEAT_BASE}/select'
SEAT_BOOK = f'{SEAT_BASE}/book'
SEAT_MY_BOOKINGS = f'{SEAT_BASE}/my-bookings'
SEAT_CANCEL = f'{SEAT_BASE}/cancel/{{booking_id}}'
SEAT_RESET = f'{SEAT_BASE}/reset'

# System routes
HEALTH = '/health'
METRICS = '/metrics'
