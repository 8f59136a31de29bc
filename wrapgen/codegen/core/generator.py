"""
Base generator interface for all wrapper generation targets.

Defines the contract that every language's wrapper and aggregation
generators implement. Rendering is pure: generators return text and
the pipeline decides where and when to write it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Type

from ...logging_config import get_logger
from .config import GeneratorConfig
from .errors import AggregationError, ClassGenerationError
from .naming import ArtifactLayout
from .references import ReferenceDescriptor, ReferenceResolver
from .resolver import ConfigResolver, ExtraDefinitionLocator
from .schema import ConfigStore, ResolvedConfig
from .sources import SourceUnit
from .storage import OverrideDetector, StorageWriter
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


@dataclass(frozen=True)
class RenderedFile:
    """Output of rendering one class."""

    path: Path
    code: str
    class_name: str
    unit: SourceUnit


class GenerationResult:
    """Container for per-class generation results and metadata."""

    def __init__(
        self,
        code: str,
        path: Optional[Path] = None,
        class_name: Optional[str] = None,
        unit: Optional[SourceUnit] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            path: Where the code belongs
            class_name: Class the code was generated for
            unit: Source unit the class came from
            metadata: Additional metadata about generation
        """
        self.code = code
        self.path = path
        self.class_name = class_name
        self.unit = unit
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def skipped(
        cls,
        message: str,
        exception: Exception = None,
        class_name: Optional[str] = None,
        unit: Optional[SourceUnit] = None,
    ) -> "GenerationResult":
        """Create a non-fatal failed result for one class."""
        result = cls(code="", class_name=class_name, unit=unit)
        result.success = False
        result.error_message = message
        result.exception = exception
        return result

    @property
    def label(self) -> str:
        unit = self.unit.path if self.unit else "?"
        return f"{unit}:{self.class_name}" if self.class_name else unit


class WrapperGenerator(ABC):
    """Abstract base class for per-class wrapper generators."""

    language_name: str = ""
    file_extension: str = ""
    wrapper_template: str = ""

    def __init__(
        self,
        store: ConfigStore,
        config: Optional[GeneratorConfig] = None,
        template_engine: Optional[TemplateEngine] = None,
        detector: Optional[OverrideDetector] = None,
        resolver: Optional[ConfigResolver] = None,
    ):
        """Initialize generator with the class table and run settings."""
        self.store = store
        self.config = config or GeneratorConfig()
        self.resolver = resolver or ConfigResolver(store)
        self.locator = ExtraDefinitionLocator(store)
        self.detector = detector or OverrideDetector()
        self.layout = self.create_layout()
        self.references = ReferenceResolver(
            store,
            self.layout,
            self.detector,
            base_type_path=self.config.base_type_path,
            symbol_aliases=self.symbol_aliases(),
        )
        self._template_engine = template_engine or create_template_engine(
            self.get_template_directory()
        )
        self._template_engine.preload(self.template_names())

    @classmethod
    def get_template_directory(cls) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Returns:
            Path to template directory or None
        """
        return None

    @classmethod
    def aggregator_class(cls) -> Optional[Type["AggregationGenerator"]]:
        """Aggregation generator that runs after all wrappers are written."""
        return None

    @abstractmethod
    def create_layout(self) -> ArtifactLayout:
        """Build the generated/override naming scheme for this language."""
        pass

    @abstractmethod
    def build_context(
        self,
        unit: SourceUnit,
        config: ResolvedConfig,
        references: Dict[str, ReferenceDescriptor],
        has_override: bool,
    ) -> Dict[str, Any]:
        """Assemble the template context for one class."""
        pass

    def template_names(self) -> Sequence[str]:
        return [self.wrapper_template]

    def symbol_aliases(self) -> Dict[str, str]:
        return {}

    @property
    def template_engine(self) -> TemplateEngine:
        return self._template_engine

    @property
    def output_root(self) -> Path:
        return self.layout.root

    def unit_directory(self, unit: SourceUnit) -> Path:
        return self.layout.root / unit.directory

    def output_path(self, unit: SourceUnit, class_name: str) -> Path:
        return self.layout.generated_path(self.unit_directory(unit), class_name)

    def has_override(self, unit: SourceUnit, class_name: str) -> bool:
        return self.detector.exists(
            self.layout.override_path(self.unit_directory(unit), class_name)
        )

    def expand_unit(self, unit: SourceUnit) -> List[str]:
        """Primary class of a unit followed by its extra definitions."""
        primary = unit.class_name
        return [primary] + self.locator.extra_definitions(primary)

    def render(self, unit: SourceUnit, class_name: Optional[str] = None) -> RenderedFile:
        """
        Render the wrapper for one class without touching storage.

        Args:
            unit: Source unit the class belongs to
            class_name: Class to render (defaults to the unit's primary class)

        Returns:
            RenderedFile with destination path and code

        Raises:
            ClassGenerationError: On any class-scoped failure
        """
        class_name = class_name or unit.class_name
        config = self.resolver.resolve(class_name)
        output_path = self.output_path(unit, config.class_name)
        references = self.references.resolve(config, output_path)

        has_override = self.has_override(unit, config.class_name)
        if has_override:
            logger.info(
                "%s override exists for %s", self.language_name, config.class_name
            )

        context = self.build_context(unit, config, references, has_override)
        code = self.render_template(self.wrapper_template, context)
        return RenderedFile(
            path=output_path,
            code=self.format_code(code),
            class_name=config.class_name,
            unit=unit,
        )

    def generate_class(
        self, unit: SourceUnit, class_name: Optional[str] = None
    ) -> GenerationResult:
        """Render one class, turning class-scoped failures into skips."""
        class_name = class_name or unit.class_name
        try:
            rendered = self.render(unit, class_name)
        except ClassGenerationError as e:
            logger.warning(
                "Error creating %s wrapper, skipping %s:%s: %s",
                self.language_name,
                unit.path,
                class_name,
                e,
            )
            return GenerationResult.skipped(
                str(e), exception=e, class_name=class_name, unit=unit
            )

        return GenerationResult(
            rendered.code,
            path=rendered.path,
            class_name=rendered.class_name,
            unit=unit,
            metadata={"language": self.language_name},
        )

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
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

        return "\n".join(formatted_lines).rstrip("\n") + "\n"

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        return self.template_engine.render_template(template_name, context)

    def create_aggregator(self, writer: StorageWriter) -> Optional["AggregationGenerator"]:
        aggregator_class = self.aggregator_class()
        if aggregator_class is None:
            return None
        return aggregator_class(
            self.layout, self.template_engine, self.config, writer, self.detector
        )


class AggregationGenerator(ABC):
    """Writes index/registration files once all wrappers exist."""

    def __init__(
        self,
        layout: ArtifactLayout,
        template_engine: TemplateEngine,
        config: GeneratorConfig,
        writer: StorageWriter,
        detector: Optional[OverrideDetector] = None,
    ):
        self.layout = layout
        self.template_engine = template_engine
        self.config = config
        self.writer = writer
        self.detector = detector or OverrideDetector()

    @abstractmethod
    def aggregate(self, units: Sequence[SourceUnit]) -> List[Path]:
        """Write aggregation files and return their paths."""
        pass

    def run(self, units: Sequence[SourceUnit]) -> List[Path]:
        """Aggregate, reporting storage failures as ``AggregationError``."""
        try:
            return self.aggregate(units)
        except OSError as e:
            raise AggregationError(
                f"Failed to write aggregation files under {self.layout.root}: {e}"
            ) from e
