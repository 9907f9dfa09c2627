"""
TypeScript declaration generator implementation.

Generates one ``.d.ts`` class declaration per class description, plus
the index file re-exporting all of them.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from ....utils import collation_key
from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator
from ...core.schema import (
    ClassDescription,
    ConstantEntry,
    MemberEntry,
    MethodEntry,
    Param,
    SignalEntry,
)
from .extractor import ClassModelExtractor
from .naming import create_typescript_sanitizer
from .types import FALLBACK_TYPE, ImportCollector, TypeMapper

# Class files import shared names through the index
INDEX_MODULE = "../index.d.ts"

# Numeric type shared by every class constant
CONSTANT_TYPE = "int"

SIGNAL_TYPE = "Signal"


def render_param(param: Param) -> str:
    """``name: Type`` for required params, ``name?: Type`` for optional ones."""
    marker = "?" if param.optional else ""
    if param.type_expr is None:
        return f"{param.name}{marker}"
    return f"{param.name}{marker}: {param.type_expr}"


def _visibility_prefix(is_private: bool) -> str:
    return "private " if is_private else ""


def render_member(member: MemberEntry) -> str:
    return f"{_visibility_prefix(member.is_private)}{member.emitted_name}: {member.type_expr};"


def render_method(method: MethodEntry) -> str:
    params = ", ".join(render_param(p) for p in method.params)
    prefix = _visibility_prefix(method.is_private)
    return f"{prefix}{method.emitted_name}({params}): {method.return_type};"


def render_signal(signal: SignalEntry) -> str:
    # Signal params are labels only; they are never optional
    params = ", ".join(
        f"{p.name}: {p.type_expr}" if p.type_expr else p.name for p in signal.params
    )
    return f"{signal.emitted_name}: {SIGNAL_TYPE}<[{params}]>;"


def render_constant(constant: ConstantEntry) -> str:
    return f"static readonly {constant.name}: {CONSTANT_TYPE};"


class TypeScriptGenerator(CodeGenerator):
    """Code generator for TypeScript class declarations."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize TypeScript generator with configuration."""
        super().__init__(config)

        self.sanitizer = create_typescript_sanitizer(self.config.public_underscore_names)
        self.type_mapper = TypeMapper(self.config.type_overrides)
        self.extractor = ClassModelExtractor(
            sanitizer=self.sanitizer,
            type_mapper=self.type_mapper,
            docs_url=self.config.docs_url,
            skipped_class_names=self.config.skipped_class_names,
        )

    def get_template_directory(self) -> Optional[Path]:
        """Return the TypeScript templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "typescript"

    @property
    def file_extension(self) -> str:
        """Return declaration file extension."""
        return ".d.ts"

    def extract(self, raw_text: str) -> Optional[ClassDescription]:
        return self.extractor.extract(raw_text)

    def generate(self, description: ClassDescription) -> str:
        """Generate the declaration file of one class using templates."""
        context = {
            "import_statements": self.get_import_statements(description),
            "doc": description.doc,
            "class_name": description.name,
            "parent": description.parent,
            "entries": self._entries(description),
        }
        return self.render_template("class.d.ts.j2", context)

    def _entries(self, description: ClassDescription) -> List[Dict[str, Any]]:
        """Body entries in emission order: members, methods, signals, constants."""
        entries = []
        entries.extend(
            {"doc": m.doc, "declaration": render_member(m)} for m in description.members
        )
        entries.extend(
            {"doc": m.doc, "declaration": render_method(m)} for m in description.methods
        )
        entries.extend(
            {"doc": s.doc, "declaration": render_signal(s)} for s in description.signals
        )
        entries.extend(
            {"doc": c.doc, "declaration": render_constant(c)} for c in description.constants
        )
        return entries

    def collect_imports(self, description: ClassDescription) -> List[str]:
        """Class names the declaration references, minus itself and builtins."""
        collector = ImportCollector()
        collector.scan_all(description.referenced_types)
        collector.scan(description.parent)
        if description.signals:
            collector.scan(SIGNAL_TYPE)
        return collector.imports_for(description.name)

    def get_import_statements(self, description: ClassDescription) -> List[str]:
        imports = self.collect_imports(description)
        if not imports:
            return []
        return [f'import type {{ {", ".join(imports)} }} from "{INDEX_MODULE}";']

    def generate_index(self, class_names: List[str]) -> str:
        """Generate the index file re-exporting the prelude and every class."""
        context = {
            "tag": self.config.godot_tag,
            "core_module": self.config.core_module,
            "signal_module": self.config.signal_module,
            "class_names": sorted(class_names, key=collation_key),
        }
        return self.format_code(self.render_template("index.d.ts.j2", context))

    def validate_description(self, description: ClassDescription) -> List[str]:
        """Validate a class model for TypeScript generation."""
        warnings = super().validate_description(description)

        type_exprs = [m.type_expr for m in description.members]
        for method in description.methods:
            type_exprs.append(method.return_type)
            type_exprs.extend(p.type_expr for p in method.params)
        if any(FALLBACK_TYPE in (t or "") for t in type_exprs):
            warnings.append(
                f"Class '{description.name}' uses types without a TypeScript "
                f"equivalent; declared as {FALLBACK_TYPE}"
            )

        member_names = {m.emitted_name for m in description.members}
        for name in sorted(member_names & {m.emitted_name for m in description.methods}):
            warnings.append(
                f"{description.name}.{name} is declared as both a member and a method"
            )

        for method in description.methods:
            seen_optional = False
            for param in method.params:
                if param.optional:
                    seen_optional = True
                elif seen_optional:
                    warnings.append(
                        f"{description.name}.{method.emitted_name}: required parameter "
                        f"{param.name} follows an optional one"
                    )
                    break

        return warnings
