"""
Shared Runtime Namespace.

The namespace is the object every extension writes into and tests read from.
It is published to the host as the builtins ``t`` and ``Titan`` so that
extension code and test modules can use it without importing anything.

Example:
    t.crypto.hash("sha256", "test")
    t["@scope/ext"]["fn"]()
"""

import builtins
import functools
from collections.abc import Iterator
from types import SimpleNamespace
from typing import Any

HOST_BINDINGS = ("t", "Titan")
FIXED_ENTRIES = ("log", "native")


class Bag(SimpleNamespace):
    """
    Attribute bag that can also be used with item access.

    Only dunder methods are defined, so any entry name (``get``, ``set``,
    ``items``...) stays available to extensions. Names that are not valid
    identifiers are reachable through item access.
    """

    def __getitem__(self, name: str) -> Any:
        try:
            return self.__dict__[name]
        except KeyError:
            raise KeyError(name) from None

    def __setitem__(self, name: str, value: Any) -> None:
        self.__dict__[name] = value

    def __delitem__(self, name: str) -> None:
        del self.__dict__[name]

    def __contains__(self, name: object) -> bool:
        return name in self.__dict__

    def __iter__(self) -> Iterator[str]:
        return iter(list(self.__dict__))

    def __len__(self) -> int:
        return len(self.__dict__)


def make_logger() -> functools.partial:
    """A fresh logger that prints with the [Titan] prefix."""
    return functools.partial(print, "[Titan]")


class Namespace(Bag):
    """Root runtime object: extension name -> Bag, plus log and native."""

    def __init__(self) -> None:
        super().__init__(log=make_logger(), native=Bag())

    def __repr__(self) -> str:
        return f"Namespace({extension_names(self)})"


def ensure_bag(namespace: Namespace, name: str) -> Any:
    """
    Return the entry of an extension, creating an empty Bag if absent.

    An existing entry is returned as-is even when it is not a Bag (an
    extension named ``log`` shares the logger), so callers attach members
    with setattr.
    """
    if namespace.__dict__.get(name) is None:
        namespace[name] = Bag()
    return namespace[name]


def has_entry(namespace: Namespace, name: str) -> bool:
    """True when the namespace holds a non-None entry under name."""
    return namespace.__dict__.get(name) is not None


def extension_names(namespace: Namespace) -> list[str]:
    """Names of the extension entries, in activation order."""
    return [name for name in namespace if name not in FIXED_ENTRIES]


def publish(namespace: Namespace) -> None:
    """
    Expose a namespace to the host under both global bindings.

    Any previously published namespace is replaced.
    """
    for binding in HOST_BINDINGS:
        setattr(builtins, binding, namespace)


def get_namespace() -> Namespace | None:
    """Return the published namespace, if any."""
    return getattr(builtins, HOST_BINDINGS[0], None)


def unpublish() -> None:
    """Remove the global bindings."""
    for binding in HOST_BINDINGS:
        if hasattr(builtins, binding):
            delattr(builtins, binding)
