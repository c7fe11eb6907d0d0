"""Parsing of RAML type expressions into :class:`TypeReference` values."""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from .ir import ScalarType, TypeReference

SCALAR_TOKENS: Dict[str, ScalarType] = {
    "string": ScalarType.STRING,
    "time-only": ScalarType.STRING,
    "integer": ScalarType.INTEGER,
    "number": ScalarType.NUMBER,
    "boolean": ScalarType.BOOLEAN,
    "datetime": ScalarType.DATETIME,
    "datetime-only": ScalarType.DATETIME,
    "date-only": ScalarType.DATE,
    "object": ScalarType.ANY,
    "any": ScalarType.ANY,
    "file": ScalarType.ANY,
}

NIL_TOKEN = "nil"
ARRAY_TOKEN = "array"


def is_scalar_token(token: str) -> bool:
    return token.strip() in SCALAR_TOKENS


def parse_type_token(token: str) -> Tuple[TypeReference, bool]:
    """
    Parse a type expression such as ``Money[]`` or ``string | nil``.

    Returns:
        The resolved reference and whether the expression unions ``nil``.
    """
    expression = token.strip()
    depth = 0
    while expression.endswith("[]"):
        depth += 1
        expression = expression[:-2].strip()
    if expression.startswith("(") and expression.endswith(")"):
        expression = expression[1:-1].strip()

    parts = [part.strip() for part in expression.split("|") if part.strip()]
    nullable = NIL_TOKEN in parts
    parts = [part for part in parts if part != NIL_TOKEN]

    if len(parts) == 1:
        reference = _single(parts[0])
    else:
        # unions of several concrete types have no common shape
        reference = TypeReference.scalar(ScalarType.ANY)

    for _ in range(depth):
        reference = TypeReference.array_of(reference)
    return reference, nullable and depth == 0


def parse_type_node(node: Any) -> Tuple[Optional[TypeReference], bool]:
    """Parse a type given either as a token or as an inline mapping."""
    if node is None:
        return None, False
    if isinstance(node, str):
        return parse_type_token(node)
    if not isinstance(node, dict):
        return None, False
    if "enum" in node:
        return TypeReference.scalar(ScalarType.STRING), False

    declared = node.get("type")
    if declared == ARRAY_TOKEN or (declared is None and "items" in node):
        items, _ = parse_type_node(node.get("items", "any"))
        return TypeReference.array_of(items or TypeReference.scalar(ScalarType.ANY)), False
    if isinstance(declared, str):
        return parse_type_token(declared)
    if isinstance(declared, list) and len(declared) == 1:
        return parse_type_node(declared[0])
    if "properties" in node:
        # inline anonymous object
        return TypeReference.scalar(ScalarType.ANY), False
    return TypeReference.scalar(ScalarType.STRING), False


def _single(token: str) -> TypeReference:
    if token == ARRAY_TOKEN:
        return TypeReference.array_of(TypeReference.scalar(ScalarType.ANY))
    if token in SCALAR_TOKENS:
        return TypeReference.scalar(SCALAR_TOKENS[token])
    return TypeReference.to_type(token)
