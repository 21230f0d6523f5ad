"""
Process-wide structured serialization.

Extensions that declare serialize/deserialize hooks get these two functions
bound directly instead of going through the native library.
"""

from typing import Any

import dill


def serialize(value: Any) -> bytes:
    """Serialize a value to bytes."""
    return dill.dumps(value)


def deserialize(data: bytes) -> Any:
    """Deserialize bytes produced by serialize()."""
    return dill.loads(data)


HOOKS = {
    "serialize": serialize,
    "deserialize": deserialize,
}
