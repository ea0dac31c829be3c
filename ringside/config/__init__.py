"""Configuration for Ringside."""

from ringside.config.policy import BookingPolicy, get_policy, load_policy
from ringside.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "BookingPolicy",
    "get_policy",
    "load_policy",
]
