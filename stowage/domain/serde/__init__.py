"""
Serde Domain Module
"""

from .contracts import Serde
from .errors import DeserializationError, SerdeError, SerializationError

__all__ = ["Serde", "SerdeError", "SerializationError", "DeserializationError"]
