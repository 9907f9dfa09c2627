"""
TypeScript type system for code generation.

Maps engine type names to TypeScript type expressions and collects the
class references those expressions need to import.
"""

import re
from typing import Dict, Iterable, List, Optional, Set

from ....logging_config import get_logger

logger = get_logger(__name__)


# Types the prelude or the language provide without an import
BUILTIN_TYPES = frozenset(
    {
        "any",
        "bigint",
        "boolean",
        "false",
        "float",
        "int",
        "never",
        "null",
        "number",
        "object",
        "string",
        "symbol",
        "true",
        "undefined",
        "unknown",
        "void",
    }
)

# Direct engine → TypeScript mappings; other identifiers are class references
TYPESCRIPT_TYPE_MAP: Dict[str, str] = {
    "void": "void",
    "bool": "boolean",
    "int": "int",
    "float": "float",
    "String": "string",
    "Array": "GodotArray<any>",
    "Dictionary": "GodotDictionary<any>",
}

# Used for descriptions that omit a type, and for tokens we cannot express
MISSING_TYPE = "any"
FALLBACK_TYPE = "unknown"

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_TYPED_ARRAY_SUFFIX = re.compile(r"^(.+)\[\]$")
_TYPED_ARRAY_GENERIC = re.compile(r"^Array\[(.+)\]$")
_TYPED_DICTIONARY = re.compile(r"^Dictionary\[(.+)\]$")


class ImportCollector:
    """
    Collects class names referenced by type expressions.

    Scans every identifier in the expressions it is fed, so element types
    nested inside compound expressions are captured as well.
    """

    def __init__(self, builtin_types: Iterable[str] = BUILTIN_TYPES):
        self.builtin_types = frozenset(builtin_types)
        self._names: Set[str] = set()

    def scan(self, type_expr: Optional[str]) -> None:
        """Record every non-builtin identifier of a type expression."""
        if not type_expr:
            return
        for identifier in _IDENTIFIER.findall(type_expr):
            if identifier not in self.builtin_types:
                self._names.add(identifier)

    def scan_all(self, type_exprs: Iterable[Optional[str]]) -> None:
        for type_expr in type_exprs:
            self.scan(type_expr)

    @property
    def names(self) -> Set[str]:
        return set(self._names)

    def imports_for(self, class_name: str) -> List[str]:
        """Sorted, de-duplicated import list excluding the class itself."""
        return sorted(self._names - {class_name})

    def __contains__(self, name: str) -> bool:
        return name in self._names


class TypeMapper:
    """Maps engine type tokens to TypeScript type expressions."""

    def __init__(self, type_overrides: Optional[Dict[str, str]] = None):
        self.type_map = dict(TYPESCRIPT_TYPE_MAP)
        if type_overrides:
            self.type_map.update(type_overrides)

    def map_type(
        self, token: Optional[str], collector: Optional[ImportCollector] = None
    ) -> str:
        """
        Convert an engine type token to a TypeScript type expression.

        Never raises: an unknown token degrades to ``unknown``. When a
        collector is given, the resulting expression is fed to it.
        """
        type_expr = self._map(token)
        if collector is not None:
            collector.scan(type_expr)
        return type_expr

    def _map(self, token: Optional[str]) -> str:
        if token is None:
            return MISSING_TYPE

        token = token.strip()
        if not token:
            return MISSING_TYPE

        if token in self.type_map:
            return self.type_map[token]

        # Typed arrays: "Node[]" and "Array[Node]"
        match = _TYPED_ARRAY_SUFFIX.match(token) or _TYPED_ARRAY_GENERIC.match(token)
        if match:
            return f"{self._map(match.group(1))}[]"

        # Typed dictionaries keep the untyped container
        if _TYPED_DICTIONARY.match(token):
            return self.type_map["Dictionary"]

        # Class and builtin references pass through unchanged
        if _IDENTIFIER.fullmatch(token):
            return token

        logger.debug("No TypeScript equivalent for type %r, using %s", token, FALLBACK_TYPE)
        return FALLBACK_TYPE

    def is_builtin(self, type_expr: str) -> bool:
        """Check if a type expression needs no import."""
        return all(i in BUILTIN_TYPES for i in _IDENTIFIER.findall(type_expr))
