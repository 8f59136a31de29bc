"""
Orchestration of a full wrapper generation run.

Enumerates source units, expands each into its classes, renders and
writes every class on a thread pool, then runs the language's
aggregation step once all class tasks have settled. Language pipelines
are independent and run side by side.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from ..logging_config import get_logger
from .core.config import GeneratorConfig
from .core.errors import UnknownClass
from .core.generator import GenerationResult, WrapperGenerator
from .core.schema import ConfigStore
from .core.sources import ConfigStoreEnumerator, SourceTreeEnumerator, SourceUnit
from .core.storage import OverrideDetector, StorageWriter
from .registry import GeneratorRegistry, get_registry

logger = get_logger(__name__)


@dataclass
class LanguageReport:
    """Outcome of one language pipeline."""

    language: str
    results: List[GenerationResult] = field(default_factory=list)
    aggregated: List[Path] = field(default_factory=list)

    @property
    def written(self) -> List[Path]:
        return [result.path for result in self.results if result.success]

    @property
    def skipped(self) -> List[GenerationResult]:
        return [result for result in self.results if not result.success]


@dataclass
class PipelineReport:
    """Outcome of a whole run, keyed by language."""

    units: List[SourceUnit] = field(default_factory=list)
    languages: Dict[str, LanguageReport] = field(default_factory=dict)

    @property
    def skipped(self) -> List[GenerationResult]:
        return [
            result for report in self.languages.values() for result in report.skipped
        ]

    @property
    def success(self) -> bool:
        return not self.skipped


class WrapperPipeline:
    """Runs every enabled language pipeline over one class table."""

    def __init__(
        self,
        store: ConfigStore,
        config: Optional[GeneratorConfig] = None,
        registry: Optional[GeneratorRegistry] = None,
        writer: Optional[StorageWriter] = None,
        detector: Optional[OverrideDetector] = None,
    ):
        self.store = store
        self.config = config or GeneratorConfig()
        self.registry = registry or get_registry()
        self.writer = writer or StorageWriter()
        self.detector = detector or OverrideDetector()

    def enumerate_units(self) -> List[SourceUnit]:
        """Source units from the library tree, or from the table if none is set."""
        if self.config.source_dir:
            enumerator = SourceTreeEnumerator(
                Path(self.config.source_dir),
                pattern=self.config.source_glob,
                ignore_patterns=self.config.ignore_patterns,
                custom_classes=self.config.custom_classes,
            )
        else:
            enumerator = ConfigStoreEnumerator(
                self.store, custom_classes=self.config.custom_classes
            )
        return enumerator.units()

    def create_generator(self, language: str) -> WrapperGenerator:
        return self.registry.create_generator(
            language, self.store, self.config, detector=self.detector
        )

    def plan(
        self, generator: WrapperGenerator, units: Sequence[SourceUnit]
    ) -> Tuple[List[Tuple[SourceUnit, str]], List[GenerationResult]]:
        """
        Expand units into (unit, class) tasks.

        Args:
            generator: Generator whose layout decides output locations
            units: Source units to expand

        Returns:
            Tuple of class tasks and results for units that were skipped
        """
        tasks: List[Tuple[SourceUnit, str]] = []
        skipped: List[GenerationResult] = []
        seen = set()

        for unit in units:
            try:
                class_names = generator.expand_unit(unit)
            except UnknownClass as e:
                logger.warning(
                    "Error creating %s wrapper, skipping %s: %s",
                    generator.language_name,
                    unit.path,
                    e,
                )
                skipped.append(
                    GenerationResult.skipped(
                        str(e), exception=e, class_name=unit.class_name, unit=unit
                    )
                )
                continue

            for class_name in class_names:
                key = (generator.output_path(unit, class_name), class_name)
                if key in seen:
                    continue
                seen.add(key)
                tasks.append((unit, class_name))

        return tasks, skipped

    def run_language(self, language: str, units: Sequence[SourceUnit]) -> LanguageReport:
        """
        Generate every class for one language, then aggregate.

        Raises:
            AggregationError: If index or package files cannot be written
        """
        generator = self.create_generator(language)
        tasks, results = self.plan(generator, units)
        logger.info(
            "Generating %d %s wrappers...", len(tasks), generator.language_name
        )

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            futures = [
                executor.submit(self._generate_and_write, generator, unit, class_name)
                for unit, class_name in tasks
            ]
            # Collected in submission order so reports are stable across runs
            results.extend(future.result() for future in futures)

        report = LanguageReport(generator.language_name, results)

        aggregator = generator.create_aggregator(self.writer)
        if aggregator is not None:
            report.aggregated = aggregator.run(units)

        return report

    def _generate_and_write(
        self, generator: WrapperGenerator, unit: SourceUnit, class_name: str
    ) -> GenerationResult:
        result = generator.generate_class(unit, class_name)
        if not result.success:
            return result

        try:
            self.writer.write(result.path, result.code)
        except OSError as e:
            logger.warning(
                "Error writing %s wrapper, skipping %s:%s: %s",
                generator.language_name,
                unit.path,
                class_name,
                e,
            )
            return GenerationResult.skipped(
                f"failed to write {result.path}: {e}",
                exception=e,
                class_name=class_name,
                unit=unit,
            )
        return result

    def run(self, languages: Optional[Sequence[str]] = None) -> PipelineReport:
        """
        Run all requested language pipelines concurrently.

        Args:
            languages: Language names or aliases (defaults to the configured ones)

        Returns:
            PipelineReport with per-language results

        Raises:
            RegistryError: If a language is not registered
            AggregationError: If any language's aggregation step fails
        """
        names = []
        for language in languages or self.config.languages:
            name = self.registry.canonical_name(language)
            if name not in names:
                names.append(name)

        units = self.enumerate_units()
        report = PipelineReport(units=list(units))
        if not names:
            return report

        with ThreadPoolExecutor(max_workers=len(names)) as executor:
            futures = {
                name: executor.submit(self.run_language, name, units) for name in names
            }
            for name, future in futures.items():
                report.languages[name] = future.result()

        logger.info(
            "Generation finished: %d files written, %d classes skipped",
            sum(len(r.written) for r in report.languages.values()),
            len(report.skipped),
        )
        return report


def run_pipeline(
    store: ConfigStore,
    config: Optional[GeneratorConfig] = None,
    languages: Optional[Sequence[str]] = None,
) -> PipelineReport:
    """Convenience wrapper running a full generation with default collaborators."""
    return WrapperPipeline(store, config).run(languages)
