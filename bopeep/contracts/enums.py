"""Enumerations shared across all bopeep contracts."""

from enum import Enum


class SubscriptionState(str, Enum):
    """Billing state of an alert-area owner (farmer)."""
    ACTIVE = "active"
    TRIAL = "trial"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


class ReportStatus(str, Enum):
    """Workflow status of a sighting report (owned by the calling layer)."""
    PENDING = "pending"
    CLAIMED = "claimed"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class SheepTag(str, Enum):
    """Descriptors a walker can attach to a sighting."""
    ALONE = "alone"
    NEAR_ROAD = "near_road"
    IN_TOWN = "in_town"
    LOOKS_DISTRESSED = "looks_distressed"
    MULTIPLE_SHEEP = "multiple_sheep"
    INJURED = "injured"
    OTHER = "other"
