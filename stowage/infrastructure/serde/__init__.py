"""
Serde Infrastructure

Available implementations:
- JsonSerde: JSON serde for JSON-compatible values
- RedisSerde: wrapper storing numbers as bare numeric strings
"""

from .json_serde import JsonSerde
from .redis_serde import RedisSerde

__all__ = ["JsonSerde", "RedisSerde"]
