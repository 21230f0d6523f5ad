"""
Native Binding Service.

This module loads compiled extension libraries and binds their symbols.

Key features:
- Service protocol so hosts can supply their own binder
- Default ctypes implementation with a fixed token table
- UTF-8 marshalling for string arguments and results
- Retained handle list (libraries are never unloaded)
"""

import ctypes
from collections.abc import Callable
from pathlib import Path
from typing import Any, Protocol


class BindingError(Exception):
    """Base exception for native binding errors."""

    pass


class NativeLibrary(Protocol):
    """A loaded binding library."""

    def bind(self, symbol: str, result: str, parameters: list[str]) -> Callable:
        ...


class NativeBindingService(Protocol):
    """Loads binding libraries."""

    def load(self, path: Path) -> NativeLibrary:
        ...


# Loaded libraries stay referenced for the process lifetime
_loaded_libraries: list[Any] = []


def retain(handle: Any) -> None:
    """Keep a library handle alive for the rest of the process."""
    _loaded_libraries.append(handle)


def loaded_libraries() -> list[Any]:
    return list(_loaded_libraries)


_CTYPES_TOKENS: dict[str, Any] = {
    "void": None,
    "str": ctypes.c_char_p,
    "double": ctypes.c_double,
    "float": ctypes.c_float,
    "bool": ctypes.c_bool,
    "char": ctypes.c_char,
    "int": ctypes.c_int,
    "uint": ctypes.c_uint,
    "long": ctypes.c_long,
    "ulong": ctypes.c_ulong,
    "int8": ctypes.c_int8,
    "uint8": ctypes.c_uint8,
    "int16": ctypes.c_int16,
    "uint16": ctypes.c_uint16,
    "int32": ctypes.c_int32,
    "uint32": ctypes.c_uint32,
    "int64": ctypes.c_int64,
    "uint64": ctypes.c_uint64,
    "size_t": ctypes.c_size_t,
    "pointer": ctypes.c_void_p,
    "void *": ctypes.c_void_p,
}


def ctypes_type(token: str) -> Any:
    """
    Resolve a service token to a ctypes type.

    Args:
        token: Type token (after alias translation)

    Returns:
        ctypes type, or None for void

    Raises:
        BindingError: If the token is not supported
    """
    try:
        return _CTYPES_TOKENS[token]
    except KeyError as e:
        raise BindingError(f"Unsupported native type: {token}") from e


class CtypesLibrary:
    """A library loaded through ctypes."""

    def __init__(self, path: Path, library: ctypes.CDLL):
        self.path = path
        self._library = library

    def bind(self, symbol: str, result: str, parameters: list[str]) -> Callable:
        """
        Bind a symbol as a Python callable.

        Args:
            symbol: Exported symbol name
            result: Result type token
            parameters: Parameter type tokens

        Returns:
            Callable wrapping the native function

        Raises:
            BindingError: If the symbol or a type cannot be resolved
        """
        restype = ctypes_type(result)
        argtypes = [ctypes_type(p) for p in parameters]

        try:
            # Item access returns a fresh function pointer per binding
            func = self._library[symbol]
        except AttributeError as e:
            raise BindingError(f"Symbol not found in {self.path}: {symbol}") from e

        func.restype = restype
        func.argtypes = argtypes
        return _marshal_strings(func, symbol, result, parameters)

    def __repr__(self) -> str:
        return f"CtypesLibrary({self.path})"


def _marshal_strings(
    func: Callable, symbol: str, result: str, parameters: list[str]
) -> Callable:
    encode = [p == "str" for p in parameters]
    decode = result == "str"
    if not any(encode) and not decode:
        return func

    def call(*args: Any) -> Any:
        if len(args) != len(encode):
            raise TypeError(
                f"{symbol}() takes {len(encode)} arguments ({len(args)} given)"
            )
        converted = [
            arg.encode("utf-8") if flag and isinstance(arg, str) else arg
            for arg, flag in zip(args, encode, strict=True)
        ]
        value = func(*converted)
        if decode and isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    call.__name__ = symbol
    return call


class CtypesBindingService:
    """Default binding service backed by ctypes.CDLL."""

    def load(self, path: Path) -> CtypesLibrary:
        """
        Load a shared library.

        Args:
            path: Library path

        Returns:
            CtypesLibrary

        Raises:
            BindingError: If the library cannot be loaded
        """
        try:
            return CtypesLibrary(Path(path), ctypes.CDLL(str(path)))
        except OSError as e:
            raise BindingError(f"Failed to load library {path}: {e}") from e
