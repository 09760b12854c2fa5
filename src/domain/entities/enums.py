"""
Domain Enums

Enumeration types used across domain entities.
"""

from enum import Enum


class AccountStatus(str, Enum):
    """Account status"""

    active = "active"
    inactive = "inactive"
    suspended = "suspended"
    deleted = "deleted"
