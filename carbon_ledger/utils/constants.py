"""
Application constants.
"""
from enum import Enum


class ConfigFile:
    """Configuration file names."""
    PRODUCTION = "production.toml"
    DEVELOPMENT = "development.toml"
    TEST = "test.toml"


class ActivityLogType(str, Enum):
    """Farm activity types with a known carbon coefficient."""
    PLOWING = "plowing"
    SEEDING = "seeding"
    HARVESTING = "harvesting"
    FERTILIZER = "fertilizer"
    PESTICIDE = "pesticide"
    IRRIGATION = "irrigation"
    MACHINERY = "machinery"
    TREE_PLANTING = "tree_planting"
    COVER_CROPPING = "cover_cropping"


EMISSION_ACTIVITY_TYPES = frozenset(
    {
        ActivityLogType.PLOWING.value,
        ActivityLogType.SEEDING.value,
        ActivityLogType.HARVESTING.value,
        ActivityLogType.FERTILIZER.value,
        ActivityLogType.PESTICIDE.value,
        ActivityLogType.IRRIGATION.value,
        ActivityLogType.MACHINERY.value,
    }
)

SEQUESTRATION_ACTIVITY_TYPES = frozenset(
    {
        ActivityLogType.TREE_PLANTING.value,
        ActivityLogType.COVER_CROPPING.value,
    }
)


class PayoutStatus(str, Enum):
    """Payout status assigned once at creation."""
    REQUESTED = "requested"
    PENDING_REVIEW = "pending_review"
    FLAGGED_HIGH_RISK = "flagged_high_risk"


class AnomalyType:
    """Anomaly type identifiers."""
    TEMPORAL_SPIKE = "temporal_spike"
    VOLUME_SPIKE = "volume_spike"


class Severity(str, Enum):
    """Anomaly severity buckets."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class UserRole:
    """Roles carried in identity tokens."""
    FARMER = "farmer"
    ADMIN = "admin"


# Risk thresholds for the payout state machine
HIGH_RISK_THRESHOLD = 0.7
REVIEW_RISK_THRESHOLD = 0.4

# Scoring defaults
DEFAULT_TIME_WINDOW_DAYS = 30
MAX_TIME_WINDOW_DAYS = 36500
