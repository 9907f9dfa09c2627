"""
Generation driver.

Enumerates class descriptions, generates one declaration per class and
assembles the index file and the API map. One class is read, extracted,
emitted and written before the next begins.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from ..logging_config import get_logger
from ..utils import (
    LoaderError,
    collation_key,
    enumerate_descriptions,
    read_description,
    read_description_from_url,
    reset_directory,
    write_text,
)
from .api_map import ApiMap, ApiMapEntry, build_class_entry
from .core.config import ConfigError, GeneratorConfig
from .core.generator import CodeGenerator, GenerationResult, GeneratorError, generate_code
from .languages.typescript.generator import TypeScriptGenerator

logger = get_logger(__name__)

CLASSES_DIRNAME = "classes"
INDEX_FILENAME = "index.d.ts"
API_MAP_FILENAME = "api-map.json"


@dataclass
class DescriptionSource:
    """Where one class description is read from."""

    name: str
    location: str
    remote: bool = False


@dataclass
class RunSummary:
    """Outcome of a generation run."""

    output_dir: Path
    generated: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    index_path: Optional[Path] = None
    api_map_path: Optional[Path] = None

    @property
    def total(self) -> int:
        return len(self.generated) + len(self.skipped) + len(self.failed)


class GenerationPipeline:
    """Runs declaration generation over a corpus of class descriptions."""

    def __init__(
        self,
        config: GeneratorConfig,
        generator: Optional[CodeGenerator] = None,
    ):
        self.config = config
        self.generator = generator or TypeScriptGenerator(config)

    # Enumerate

    def is_selected(self, name: str) -> bool:
        """Check a class name against the exclusion lists and the subset."""
        if name in self.config.excluded_classes:
            return False
        if name in self.config.skipped_class_names:
            return False
        subset = self.config.subset_names
        if subset is not None and name not in subset:
            return False
        return True

    def enumerate_sources(self, remote: bool = False) -> List[DescriptionSource]:
        """
        List the descriptions to process, sorted by class name.

        Raises:
            ConfigError: If remote mode is requested without a subset
            LoaderError: If the local description directory is unusable
        """
        if remote:
            subset = self.config.subset_names
            if not subset:
                raise ConfigError("Remote descriptions require a subset of class names")
            base_url = self.config.description_base_url
            return [
                DescriptionSource(name, f"{base_url}/{name}.xml", remote=True)
                for name in sorted(subset, key=collation_key)
                if self.is_selected(name)
            ]

        paths = enumerate_descriptions(self.config.classes_dir)
        sources = [
            DescriptionSource(path.stem, str(path))
            for path in paths
            if self.is_selected(path.stem)
        ]

        subset = self.config.subset_names
        if subset:
            missing = subset - {source.name for source in sources}
            for name in sorted(missing):
                logger.warning("Subset class %s has no description", name)

        return sources

    # Per class

    def read(self, source: DescriptionSource) -> str:
        if source.remote:
            return read_description_from_url(source.location)
        return read_description(source.location)

    def process(self, raw_text: str) -> Tuple[GenerationResult, Optional[ApiMapEntry]]:
        """
        Extract and emit one class.

        Pure with respect to the run: the API map entry is returned for the
        caller to merge, nothing is written.
        """
        result = generate_code(self.generator, raw_text)
        if not result.success:
            return result, None
        return result, build_class_entry(result.description)

    def class_path(self, class_name: str) -> Path:
        return (
            self.config.output_dir
            / CLASSES_DIRNAME
            / f"{class_name}{self.generator.file_extension}"
        )

    # Run

    def run(
        self,
        remote: bool = False,
        on_progress: Optional[Callable[[DescriptionSource], None]] = None,
    ) -> RunSummary:
        """
        Generate every selected class, then the index and the API map.

        Args:
            remote: Fetch descriptions over HTTP instead of reading files
            on_progress: Called after each description is handled

        Raises:
            GeneratorError: If the input cannot be enumerated or the
                output cannot be written
        """
        try:
            sources = self.enumerate_sources(remote=remote)
        except LoaderError as e:
            raise GeneratorError(str(e)) from e

        output_dir = self.config.output_dir
        try:
            reset_directory(output_dir)
        except OSError as e:
            raise GeneratorError(f"Cannot prepare output directory {output_dir}: {e}") from e

        summary = RunSummary(output_dir=output_dir)
        api_map = ApiMap(self.config.godot_tag)
        logger.info("Generating %d class declarations into %s", len(sources), output_dir)

        for source in sources:
            self._process_source(source, api_map, summary)
            if on_progress is not None:
                on_progress(source)

        try:
            summary.index_path = write_text(
                output_dir / INDEX_FILENAME,
                self.generator.generate_index(api_map.class_names()),
            )
            summary.api_map_path = write_text(output_dir / API_MAP_FILENAME, api_map.to_json())
        except OSError as e:
            raise GeneratorError(f"Cannot write output files in {output_dir}: {e}") from e

        logger.info(
            "Generated %d classes (%d skipped, %d failed)",
            len(summary.generated),
            len(summary.skipped),
            len(summary.failed),
        )
        return summary

    def _process_source(
        self, source: DescriptionSource, api_map: ApiMap, summary: RunSummary
    ) -> None:
        try:
            raw_text = self.read(source)
        except (LoaderError, FileNotFoundError) as e:
            logger.warning("Skipping %s: %s", source.name, e)
            summary.failed.append(source.name)
            return

        result, entry = self.process(raw_text)

        if result.skipped:
            logger.info("Skipped %s", source.name)
            summary.skipped.append(source.name)
            return

        if not result.success:
            logger.warning("Failed to generate %s: %s", source.name, result.error_message)
            summary.failed.append(source.name)
            return

        class_name = result.class_name
        try:
            write_text(self.class_path(class_name), result.code)
        except OSError as e:
            raise GeneratorError(f"Cannot write declaration for {class_name}: {e}") from e

        for warning in result.warnings:
            logger.warning(warning)
        summary.warnings.extend(result.warnings)

        api_map.add(class_name, entry)
        summary.generated.append(class_name)
        logger.debug("Generated %s", class_name)


def run_generation(config: GeneratorConfig, remote: bool = False) -> RunSummary:
    """Run the TypeScript declaration pipeline with the given configuration."""
    return GenerationPipeline(config).run(remote=remote)
