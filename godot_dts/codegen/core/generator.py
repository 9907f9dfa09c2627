"""
Base generator interface for all code generation targets.

Defines the contract that declaration generators must implement.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import GeneratorConfig
from .schema import ClassDescription
from .templates import TemplateEngine, create_template_engine


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'typescript')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.d.ts')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def extract(self, raw_text: str) -> Optional[ClassDescription]:
        """
        Build the resolved model of one class description.

        Returns:
            The class model, or None when the description is skipped
        """
        pass

    @abstractmethod
    def generate(self, description: ClassDescription) -> str:
        """
        Generate the declaration file for one class.

        Args:
            description: Resolved class model

        Returns:
            Generated code as a string
        """
        pass

    @abstractmethod
    def generate_index(self, class_names: List[str]) -> str:
        """Generate the index file re-exporting every generated class."""
        pass

    def get_import_statements(self, description: ClassDescription) -> List[str]:
        """
        Get any required import statements for the generated code.

        Returns:
            List of import statements (can be empty)
        """
        return []

    def validate_description(self, description: ClassDescription) -> List[str]:
        """
        Validate a class model for basic structural issues.

        Language generators should override this to add language-specific validation.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        if not (
            description.members
            or description.methods
            or description.signals
            or description.constants
        ):
            warnings.append(f"Class '{description.name}' has no entries")

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply language-specific formatting to generated code.

        Strips trailing whitespace, collapses runs of blank lines and
        ends the text with exactly one newline.
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:  # Allow max 2 consecutive blank lines
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        code: str,
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
        description: Optional[ClassDescription] = None,
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
            description: The class model the code was generated from
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.description = description
        self.success = True
        self.skipped = False
        self.error_message = None
        self.exception = None

    @property
    def class_name(self) -> Optional[str]:
        return self.description.name if self.description else None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result

    @classmethod
    def skip(cls, message: str) -> "GenerationResult":
        """Create a result for a description that is deliberately not generated."""
        result = cls(code="")
        result.success = False
        result.skipped = True
        result.error_message = message
        return result


def generate_code(generator: CodeGenerator, raw_text: str) -> GenerationResult:
    """
    Generate one class declaration with error handling.

    Args:
        generator: Code generator instance
        raw_text: Raw class description

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        description = generator.extract(raw_text)
        if description is None:
            return GenerationResult.skip("Description skipped")

        # Validate at the base level
        warnings = generator.validate_description(description)

        # Generate and format code
        code = generator.format_code(generator.generate(description))

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "class_name": description.name,
            "parent": description.parent,
            "member_count": len(description.members),
            "method_count": len(description.methods),
            "signal_count": len(description.signals),
            "constant_count": len(description.constants),
        }

        return GenerationResult(code, warnings, metadata, description=description)

    except Exception as e:
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)
