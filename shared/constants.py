"""
Application-wide constants and configuration values.

This module centralizes all magic numbers, thresholds, and configuration
constants used throughout the application to eliminate duplication and
provide a single source of truth.
"""

from decimal import Decimal
from typing import Dict


# =================== TOKEN CONVERSION CONSTANTS ===================

# Acquisition cost of one token (EUR)
TOKEN_COST = Decimal("2.7")
# Redemption value of one token against a restaurant price (EUR)
TOKEN_VALUE = Decimal("5.4")

# Currency precision for change and real-paid amounts
CURRENCY_QUANTUM = Decimal("0.01")


# =================== VALUE OBJECT CONSTANTS ===================

RATING_MIN = Decimal("0")
RATING_MAX = Decimal("5")
RATING_EQUALITY_TOLERANCE = Decimal("0.01")

PRICE_EQUALITY_TOLERANCE = Decimal("0.001")

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"


# =================== LENDING CONSTANTS ===================

LENDING_STATUS_PENDING = "pending"
LENDING_STATUS_ACCEPTED = "accepted"
LENDING_STATUS_DECLINED = "declined"

# Labels rendered next to a lending balance
LENDING_STATUS_LABELS: Dict[str, str] = {
    LENDING_STATUS_PENDING: "Ausstehend",
    LENDING_STATUS_ACCEPTED: "Bestätigt",
    LENDING_STATUS_DECLINED: "Bestätigt",
}


# =================== AUTH CONSTANTS ===================

ROLE_USER = "user"
ROLE_ADMIN = "admin"

SESSION_COOKIE_NAME = "tl_session"
DEFAULT_SESSION_TTL_MINUTES = 60 * 24
DEFAULT_JWT_ALGORITHM = "HS256"


# =================== LOGGING CONSTANTS ===================

LOG_RETENTION_DAYS = 7
AUDIT_MESSAGE_PREFIX = "AUDIT: "
CORRELATION_HEADER = "X-Correlation-ID"

FALLBACK_LOGGER_NAME = "token_ledger.log_fallback"
