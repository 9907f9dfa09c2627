"""
Naming utilities for safe code generation.

Handles snake_case to camelCase conversion, keyword conflicts and the
leading-underscore visibility convention used by the engine docs.
"""

import re
from typing import Iterable, NamedTuple, Optional, Set


# Characters that separate segments in path-like property names ("voice/1/cutoff_hz")
_PATH_SEPARATORS = re.compile(r"[/:.\s]+")
_INVALID_CHARS = re.compile(r"[^A-Za-z0-9_$]")


class Visibility(NamedTuple):
    """Result of visibility inference for a source identifier."""

    name: str
    is_private: bool


def to_camel_case(name: str) -> str:
    """
    Convert a snake_case identifier to camelCase.

    Every segment after the first gets its first letter upper-cased. A
    leading underscore run collapses to a single underscore, which is kept
    because it marks the identifier as internal.
    """
    stripped = name.lstrip("_")
    prefix = "_" if len(stripped) != len(name) else ""

    parts = stripped.split("_")
    head, tail = parts[0], parts[1:]
    converted = head + "".join(part[:1].upper() + part[1:] for part in tail if part)

    return f"{prefix}{converted}"


class NameSanitizer:
    """Handles name sanitization and case conversion."""

    def __init__(
        self,
        reserved_words: Optional[Set[str]] = None,
        reserved_suffix: str = "$",
        public_underscore_names: Optional[Iterable[str]] = None,
    ):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Identifiers the target language refuses
            reserved_suffix: Marker appended to names that hit a reserved word
            public_underscore_names: Source names that start with an
                underscore but belong to the public surface
        """
        self.reserved_words = reserved_words or set()
        self.reserved_suffix = reserved_suffix
        self.public_underscore_names = set(public_underscore_names or ())

    def sanitize_identifier(self, raw: str) -> str:
        """
        Make a valid identifier out of a raw name.

        Total and deterministic: never raises, the same input always gives
        the same output.
        """
        name = raw

        # Path-like names are joined segment by segment
        parts = [p for p in _PATH_SEPARATORS.split(name) if p]
        if len(parts) > 1:
            converted = [to_camel_case(p) for p in parts]
            name = converted[0] + "".join(p[:1].upper() + p[1:] for p in converted[1:])

        name = _INVALID_CHARS.sub("_", name)

        if not name:
            name = "_"
        elif name[0].isdigit():
            name = f"_{name}"

        if name in self.reserved_words:
            name = f"{name}{self.reserved_suffix}"

        return name

    def emitted_name(self, source_name: str) -> str:
        """Casing plus sanitizing: the identifier used in generated output."""
        return self.sanitize_identifier(to_camel_case(source_name))

    def is_private(self, source_name: str) -> bool:
        """Leading underscore marks an engine-internal (overridable) member."""
        if source_name in self.public_underscore_names:
            return False
        return source_name.startswith("_")

    def visibility(self, source_name: str) -> Visibility:
        """Return the emitted name together with its visibility."""
        return Visibility(self.emitted_name(source_name), self.is_private(source_name))
