"""
TypeScript-specific naming utilities and sanitization.

Handles TypeScript reserved and contextual keywords.
"""

from typing import Iterable, Optional

from ...core.config import LIFECYCLE_CALLBACK_NAMES
from ...core.naming import NameSanitizer


# Keywords and contextual keywords refused as identifiers in declarations
TYPESCRIPT_RESERVED_WORDS = {
    "any",
    "as",
    "await",
    "boolean",
    "break",
    "case",
    "catch",
    "class",
    "const",
    "constructor",
    "continue",
    "debugger",
    "declare",
    "default",
    "delete",
    "do",
    "else",
    "enum",
    "export",
    "extends",
    "false",
    "finally",
    "for",
    "from",
    "function",
    "get",
    "if",
    "implements",
    "import",
    "in",
    "instanceof",
    "interface",
    "let",
    "module",
    "namespace",
    "new",
    "null",
    "number",
    "of",
    "package",
    "private",
    "protected",
    "public",
    "require",
    "return",
    "set",
    "static",
    "string",
    "super",
    "switch",
    "symbol",
    "this",
    "throw",
    "true",
    "try",
    "type",
    "typeof",
    "var",
    "void",
    "while",
    "with",
    "yield",
}

# Appended to identifiers that hit a reserved word; keeps camelCase names underscore-free
RESERVED_SUFFIX = "$"


def create_typescript_sanitizer(
    public_underscore_names: Optional[Iterable[str]] = None,
) -> NameSanitizer:
    """
    Create a name sanitizer configured for TypeScript.

    Without an explicit list, the engine lifecycle callbacks stay public.
    """
    if public_underscore_names is None:
        public_underscore_names = LIFECYCLE_CALLBACK_NAMES
    return NameSanitizer(
        TYPESCRIPT_RESERVED_WORDS,
        reserved_suffix=RESERVED_SUFFIX,
        public_underscore_names=public_underscore_names,
    )
