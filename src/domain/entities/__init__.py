"""
Domain Entities

Each entity in its own file.
"""

from .enums import AccountStatus
from .account import Account

__all__ = [
    # Enums
    "AccountStatus",
    # Entities
    "Account",
]
