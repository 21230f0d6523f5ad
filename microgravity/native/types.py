"""
Native type aliases.

titan.json uses a few logical type names that differ from the tokens the
binding service expects. Everything else is passed through unchanged.
"""

from enum import Enum


class NativeType(Enum):
    """Logical type names with a binding-service token of their own."""

    STRING = "string"
    F64 = "f64"
    BOOL = "bool"
    VOID = "void"

    @property
    def token(self) -> str:
        return _TOKENS[self]


_TOKENS = {
    NativeType.STRING: "str",
    NativeType.F64: "double",
    NativeType.BOOL: "bool",
    NativeType.VOID: "void",
}


def translate_type(type_name: str) -> str:
    """
    Translate a titan.json type name to a binding-service token.

    Args:
        type_name: Type name as declared in the manifest

    Returns:
        Service token; unknown names are returned as-is
    """
    try:
        return NativeType(type_name).token
    except ValueError:
        return type_name


def translate_signature(
    parameters: tuple[str, ...] | list[str], result: str
) -> tuple[list[str], str]:
    """Translate a whole function signature."""
    return [translate_type(p) for p in parameters], translate_type(result)
