"""
Core schema representation for code generation.

Parses one XML class description into a generic element tree and defines
the normalized model that generators work with.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Any, List, Optional, Set


class DescriptionError(Exception):
    """Exception raised when a class description cannot be parsed."""

    pass


def as_list(value: Any) -> List[Any]:
    """
    Coerce an absent, single, or repeated value to a list.

    None becomes an empty list, a list or tuple is copied as a list, and
    anything else (including an XML element) is wrapped in a one-item list.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def parse_description(raw_text: str) -> ET.Element:
    """
    Parse the raw text of one class description.

    Raises:
        DescriptionError: If the text is not well-formed XML or its root is
            not a ``class`` element.
    """
    try:
        root = ET.fromstring(raw_text)
    except ET.ParseError as e:
        raise DescriptionError(f"Invalid class description: {e}") from e

    if root.tag != "class":
        raise DescriptionError(f"Expected <class> root element, got <{root.tag}>")

    return root


def children(element: Optional[ET.Element], container: str, tag: str) -> List[ET.Element]:
    """Return the ``tag`` children of ``container``; empty when either is absent."""
    if element is None:
        return []
    result = []
    for group in as_list(element.find(container)):
        result.extend(group.findall(tag))
    return result


def element_text(element: Optional[ET.Element]) -> str:
    """Stripped text content of an element, empty when absent."""
    if element is None or element.text is None:
        return ""
    return element.text.strip()


def deprecation_note(element: ET.Element) -> Optional[str]:
    """Deprecation note of an element, None when it is not deprecated."""
    for key in ("deprecated", "is_deprecated"):
        value = (element.get(key) or "").strip()
        if value:
            return value
    return None


@dataclass
class Param:
    """Method or signal parameter."""

    name: str
    source_name: str
    type_expr: Optional[str] = None  # None for untyped signal params
    default: Optional[str] = None

    @property
    def optional(self) -> bool:
        """A parameter is optional exactly when the source gives a default."""
        return self.default is not None


@dataclass
class MemberEntry:
    """One property of a class."""

    source_name: str
    emitted_name: str
    is_private: bool
    type_expr: str
    doc: Optional[str] = None
    deprecated: Optional[str] = None


@dataclass
class MethodEntry:
    """One callable of a class."""

    source_name: str
    emitted_name: str
    is_private: bool
    return_type: str = "void"
    params: List[Param] = field(default_factory=list)
    doc: Optional[str] = None
    deprecated: Optional[str] = None

    @property
    def returns_value(self) -> bool:
        return self.return_type != "void"


@dataclass
class SignalEntry:
    """One event a class can emit."""

    source_name: str
    emitted_name: str
    params: List[Param] = field(default_factory=list)
    doc: Optional[str] = None
    deprecated: Optional[str] = None


@dataclass
class ConstantEntry:
    """A class-scoped constant; the name is kept verbatim apart from sanitizing."""

    name: str
    doc: Optional[str] = None
    deprecated: Optional[str] = None


@dataclass
class ClassDescription:
    """Fully resolved model of one class, ready for emission."""

    name: str
    parent: Optional[str] = None
    summary: str = ""
    details: str = ""
    deprecated_note: Optional[str] = None
    doc: Optional[str] = None
    members: List[MemberEntry] = field(default_factory=list)
    methods: List[MethodEntry] = field(default_factory=list)
    signals: List[SignalEntry] = field(default_factory=list)
    constants: List[ConstantEntry] = field(default_factory=list)

    # Class names seen while mapping this class's types
    referenced_types: Set[str] = field(default_factory=set)

    def taken_names(self) -> Set[str]:
        """Emitted names already used by members and methods."""
        names = {m.emitted_name for m in self.members}
        names.update(m.emitted_name for m in self.methods)
        return names
