"""
LandTemp Products Module

Sensor profiles and QA mask definitions.
"""

from landtemp.products.base import QABitMask, SensorProfile
from landtemp.products.registry import get_profile, register_profile

__all__ = [
    "QABitMask",
    "SensorProfile",
    "get_profile",
    "register_profile",
]
