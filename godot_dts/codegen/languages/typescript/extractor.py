"""
Class model extraction for TypeScript generation.

Reads one parsed class description and resolves it into a ClassDescription:
names cased and sanitized, visibility decided, collisions resolved, types
mapped and documentation rendered.
"""

import xml.etree.ElementTree as ET
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ....logging_config import get_logger
from ....utils import collation_key
from ...core.config import AMBIENT_CLASS_NAMES
from ...core.naming import NameSanitizer
from ...core.schema import (
    ClassDescription,
    ConstantEntry,
    MemberEntry,
    MethodEntry,
    Param,
    SignalEntry,
    children,
    deprecation_note,
    element_text,
    parse_description,
)
from .jsdoc import (
    DEFAULT_DOCS_URL,
    deprecated_line,
    param_line,
    render_doc,
    returns_line,
    split_lines,
)
from .naming import create_typescript_sanitizer
from .types import ImportCollector, TypeMapper

logger = get_logger(__name__)


# Appended to a signal name that is already used by a member or method
SIGNAL_SUFFIX = "Signal"


class ClassModelExtractor:
    """Builds resolved class models from XML class descriptions."""

    def __init__(
        self,
        sanitizer: Optional[NameSanitizer] = None,
        type_mapper: Optional[TypeMapper] = None,
        docs_url: str = DEFAULT_DOCS_URL,
        skipped_class_names: Iterable[str] = AMBIENT_CLASS_NAMES,
    ):
        self.sanitizer = sanitizer or create_typescript_sanitizer()
        self.type_mapper = type_mapper or TypeMapper()
        self.docs_url = docs_url
        self.skipped_class_names = frozenset(skipped_class_names)

    def extract(self, raw_text: str) -> Optional[ClassDescription]:
        """
        Parse and resolve one class description.

        Returns:
            The resolved class, or None when the description is skipped

        Raises:
            DescriptionError: If the text cannot be parsed
        """
        return self.extract_element(parse_description(raw_text))

    def extract_element(self, root: ET.Element) -> Optional[ClassDescription]:
        name = (root.get("name") or "").strip()
        if not name:
            logger.warning("Skipping class description without a name")
            return None
        if name in self.skipped_class_names:
            logger.info("Skipping reserved class %s", name)
            return None

        collector = ImportCollector()
        description = ClassDescription(
            name=name,
            parent=(root.get("inherits") or "").strip() or None,
            summary=element_text(root.find("brief_description")),
            details=element_text(root.find("description")),
            deprecated_note=deprecation_note(root),
        )
        description.doc = self._class_doc(description)

        description.members = self._extract_members(root, collector)
        description.methods = self._extract_methods(root, collector)
        description.signals = self._extract_signals(
            root, collector, description.taken_names()
        )
        description.constants = self._extract_constants(root)
        description.referenced_types = collector.names

        logger.debug(
            "Extracted %s: %d members, %d methods, %d signals, %d constants",
            name,
            len(description.members),
            len(description.methods),
            len(description.signals),
            len(description.constants),
        )
        return description

    # Documentation

    def _render(self, lines: List[str], deprecated: Optional[str]) -> Optional[str]:
        if deprecated:
            lines = lines + [deprecated_line(deprecated)]
        return render_doc(lines, docs_url=self.docs_url)

    def _class_doc(self, description: ClassDescription) -> Optional[str]:
        text = "\n\n".join(t for t in (description.summary, description.details) if t)
        return self._render(split_lines(text), description.deprecated_note)

    # Entries

    def _named(self, elements: List[ET.Element], kind: str) -> List[Tuple[str, ET.Element]]:
        """Pair elements with their emitted names, sorted by emitted name."""
        named = []
        for element in elements:
            source_name = element.get("name")
            if not source_name:
                logger.warning("Skipping %s without a name", kind)
                continue
            named.append((self.sanitizer.emitted_name(source_name), element))

        # Stable: repeated names keep their source order
        return sorted(named, key=lambda pair: collation_key(pair[0]))

    def _extract_members(
        self, root: ET.Element, collector: ImportCollector
    ) -> List[MemberEntry]:
        members = []
        for emitted_name, element in self._named(
            children(root, "members", "member"), "member"
        ):
            source_name = element.get("name")
            deprecated = deprecation_note(element)
            members.append(
                MemberEntry(
                    source_name=source_name,
                    emitted_name=emitted_name,
                    is_private=self.sanitizer.is_private(source_name),
                    type_expr=self.type_mapper.map_type(element.get("type"), collector),
                    doc=self._render(split_lines(element_text(element)), deprecated),
                    deprecated=deprecated,
                )
            )
        return members

    def _extract_params(
        self, element: ET.Element, collector: ImportCollector, typed: bool = True
    ) -> List[Param]:
        params = []
        # Declared order is trusted as-is
        for param in element.findall("param"):
            source_name = param.get("name") or ""
            type_token = param.get("type")
            if typed or type_token:
                type_expr = self.type_mapper.map_type(type_token, collector)
            else:
                type_expr = None
            params.append(
                Param(
                    name=self.sanitizer.emitted_name(source_name),
                    source_name=source_name,
                    type_expr=type_expr,
                    default=param.get("default"),
                )
            )
        return params

    def _extract_methods(
        self, root: ET.Element, collector: ImportCollector
    ) -> List[MethodEntry]:
        methods = []
        visibility_by_name: Dict[str, bool] = {}

        for emitted_name, element in self._named(
            children(root, "methods", "method"), "method"
        ):
            source_name = element.get("name")

            # Repeated names share the visibility of their first occurrence
            if emitted_name in visibility_by_name:
                is_private = visibility_by_name[emitted_name]
            else:
                is_private = self.sanitizer.is_private(source_name)
                visibility_by_name[emitted_name] = is_private

            return_element = element.find("return")
            return_token = return_element.get("type") if return_element is not None else "void"
            return_type = self.type_mapper.map_type(return_token, collector)
            params = self._extract_params(element, collector)

            doc_lines = split_lines(element_text(element.find("description")))
            doc_lines.extend(param_line(p.name, p.type_expr, p.default) for p in params)
            if return_type != "void":
                doc_lines.append(returns_line(return_type))

            deprecated = deprecation_note(element)
            methods.append(
                MethodEntry(
                    source_name=source_name,
                    emitted_name=emitted_name,
                    is_private=is_private,
                    return_type=return_type,
                    params=params,
                    doc=self._render(doc_lines, deprecated),
                    deprecated=deprecated,
                )
            )
        return methods

    def _extract_signals(
        self, root: ET.Element, collector: ImportCollector, taken: Set[str]
    ) -> List[SignalEntry]:
        signals = []
        taken = set(taken)

        for emitted_name, element in self._named(
            children(root, "signals", "signal"), "signal"
        ):
            natural_name = emitted_name
            while emitted_name in taken:
                emitted_name = f"{emitted_name}{SIGNAL_SUFFIX}"
            if emitted_name != natural_name:
                logger.debug(
                    "Signal %s.%s renamed to %s", root.get("name"), natural_name, emitted_name
                )
            taken.add(emitted_name)

            deprecated = deprecation_note(element)
            signals.append(
                SignalEntry(
                    source_name=element.get("name"),
                    emitted_name=emitted_name,
                    params=self._extract_params(element, collector, typed=False),
                    doc=self._render(
                        split_lines(element_text(element.find("description"))), deprecated
                    ),
                    deprecated=deprecated,
                )
            )
        return signals

    def _extract_constants(self, root: ET.Element) -> List[ConstantEntry]:
        constants = []
        for element in children(root, "constants", "constant"):
            name = element.get("name")
            if not name:
                logger.warning("Skipping constant without a name in %s", root.get("name"))
                continue
            deprecated = deprecation_note(element)
            constants.append(
                ConstantEntry(
                    name=self.sanitizer.sanitize_identifier(name),
                    doc=self._render(split_lines(element_text(element)), deprecated),
                    deprecated=deprecated,
                )
            )
        return constants
