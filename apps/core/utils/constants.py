"""
Application-wide constants
"""
from decimal import Decimal

# Booking statuses
BOOKING_STATUS_PENDING = 'pending'
BOOKING_STATUS_UPCOMING = 'upcoming'
BOOKING_STATUS_CHECKED_IN = 'checked-in'
BOOKING_STATUS_COMPLETED = 'completed'
BOOKING_STATUS_CANCELLED = 'cancelled'
BOOKING_STATUS_NO_SHOW = 'no-show'
BOOKING_STATUS_BLOCKED = 'blocked'

BOOKING_STATUSES = [
    (BOOKING_STATUS_PENDING, 'Pending'),
    (BOOKING_STATUS_UPCOMING, 'Upcoming'),
    (BOOKING_STATUS_CHECKED_IN, 'Checked In'),
    (BOOKING_STATUS_COMPLETED, 'Completed'),
    (BOOKING_STATUS_CANCELLED, 'Cancelled'),
    (BOOKING_STATUS_NO_SHOW, 'No Show'),
    (BOOKING_STATUS_BLOCKED, 'Blocked'),
]

# Booking types
BOOKING_TYPE_ONLINE = 'online'
BOOKING_TYPE_WALK_IN = 'walk-in'
BOOKING_TYPE_BLOCKED = 'blocked'

BOOKING_TYPES = [
    (BOOKING_TYPE_ONLINE, 'Online'),
    (BOOKING_TYPE_WALK_IN, 'Walk-in'),
    (BOOKING_TYPE_BLOCKED, 'Blocked'),
]

# Payment methods (free-form on the booking, these are the known values)
PAYMENT_METHOD_CASH = 'cash'
PAYMENT_METHOD_ONLINE = 'online'
PAYMENT_METHOD_UPI = 'upi'
ONLINE_PAYMENT_METHODS = {PAYMENT_METHOD_ONLINE, PAYMENT_METHOD_UPI}

# Who currently holds the customer's money
COLLECTED_BY_ADMIN = 'ADMIN'
COLLECTED_BY_BARBER = 'BARBER'

COLLECTORS = [
    (COLLECTED_BY_ADMIN, 'Admin'),
    (COLLECTED_BY_BARBER, 'Barber'),
]

# Booking settlement statuses
SETTLEMENT_STATUS_PENDING = 'PENDING'
SETTLEMENT_STATUS_SETTLED = 'SETTLED'

BOOKING_SETTLEMENT_STATUSES = [
    (SETTLEMENT_STATUS_PENDING, 'Pending'),
    (SETTLEMENT_STATUS_SETTLED, 'Settled'),
]

# Settlement ledger entries
SETTLEMENT_TYPE_PAYOUT = 'PAYOUT'
SETTLEMENT_TYPE_COLLECTION = 'COLLECTION'

SETTLEMENT_TYPES = [
    (SETTLEMENT_TYPE_PAYOUT, 'Payout (platform to shop)'),
    (SETTLEMENT_TYPE_COLLECTION, 'Collection (shop to platform)'),
]

SETTLEMENT_ENTRY_PENDING = 'PENDING'
SETTLEMENT_ENTRY_COMPLETED = 'COMPLETED'

SETTLEMENT_ENTRY_STATUSES = [
    (SETTLEMENT_ENTRY_PENDING, 'Pending'),
    (SETTLEMENT_ENTRY_COMPLETED, 'Completed'),
]

# Days of week, index matches date.weekday()
DAYS_OF_WEEK = [
    ('monday', 'Monday'),
    ('tuesday', 'Tuesday'),
    ('wednesday', 'Wednesday'),
    ('thursday', 'Thursday'),
    ('friday', 'Friday'),
    ('saturday', 'Saturday'),
    ('sunday', 'Sunday'),
]

# Scheduling
MINUTES_PER_DAY = 1440
SLOT_GRID_MINUTES = 15
RECOVERY_PROBE_MINUTES = 14
BOOKING_GRACE_PERIOD_MINUTES = 2
DEFAULT_SERVICE_DURATION = 30
MAX_SERVICE_DURATION = 480  # 8 hours

# Shop policy defaults
DEFAULT_BUFFER_TIME = 0
DEFAULT_MIN_BOOKING_NOTICE = 60  # minutes
DEFAULT_MAX_BOOKING_NOTICE = 30  # days

# Barber default hours
DEFAULT_START_HOUR = '10:00'
DEFAULT_END_HOUR = '20:00'

# SystemConfig defaults
SYSTEM_CONFIG_KEY = 'global'
DEFAULT_ADMIN_COMMISSION_RATE = Decimal('10')
DEFAULT_USER_DISCOUNT_RATE = Decimal('0')
DEFAULT_MAX_CASH_BOOKINGS_PER_MONTH = 5

# Largest value the booking money columns hold (max_digits=10, decimal_places=2)
MAX_BOOKING_PRICE = Decimal('99999999.99')
