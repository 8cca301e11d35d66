from .custom_types import CustomTypes
from .known_types import KNOWN_TYPES

__all__ = ["CustomTypes", "KNOWN_TYPES"]
