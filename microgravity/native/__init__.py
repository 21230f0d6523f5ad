"""
MicroGravity Native - Binding compiled extension libraries.

This module contains:
- NativeType: logical type aliases used in titan.json
- CtypesBindingService: default binding service
- serialize/deserialize: process-wide serialization hooks
"""

from microgravity.native.binding import (
    BindingError,
    CtypesBindingService,
    NativeBindingService,
    NativeLibrary,
)
from microgravity.native.types import NativeType, translate_type

__all__ = [
    "BindingError",
    "CtypesBindingService",
    "NativeBindingService",
    "NativeLibrary",
    "NativeType",
    "translate_type",
]
