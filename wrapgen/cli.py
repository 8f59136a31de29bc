"""
Command-line interface for wrapper generation.

Provides the ``wrapgen`` command: ``generate``, ``resolve`` and
``list-languages``.
"""

import argparse
import logging
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .codegen.core.config import get_config_manager, load_config
from .codegen.core.errors import GeneratorError
from .codegen.core.resolver import ConfigResolver, ExtraDefinitionLocator
from .codegen.core.schema import ConfigStore
from .codegen.pipeline import PipelineReport, WrapperPipeline
from .codegen.registry import RegistryError, get_registry
from .logging_config import configure_logging, get_logger

logger = get_logger(__name__)

# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wrapgen",
        description="Generate JavaScript and Python widget wrappers from a class table",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  wrapgen generate classes.json --source-dir node_modules/three/src
  wrapgen generate classes.json --language js --js-out js/src
  wrapgen resolve classes.json Mesh
  wrapgen list-languages
        """.strip(),
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command")

    generate = subparsers.add_parser(
        "generate", help="Generate wrappers, indices and package files"
    )
    generate.add_argument("classes", help="Class table (JSON)")
    generate.add_argument("--config", help="Configuration file path (JSON)")
    generate.add_argument(
        "--language",
        "-l",
        action="append",
        help="Target language (repeatable, default: all configured)",
    )
    generate.add_argument("--source-dir", help="Root of the wrapped library's sources")
    generate.add_argument("--js-out", help="JavaScript output directory")
    generate.add_argument("--py-out", help="Python output directory")
    generate.add_argument("--workers", type=int, help="Worker threads per language")
    generate.set_defaults(func=_handle_generate)

    resolve = subparsers.add_parser(
        "resolve", help="Show the resolved configuration of one class"
    )
    resolve.add_argument("classes", help="Class table (JSON)")
    resolve.add_argument("class_name", metavar="CLASS", help="Class to resolve")
    resolve.add_argument("--config", help="Configuration file path (JSON)")
    resolve.add_argument(
        "--language",
        "-l",
        default="javascript",
        help="Language whose import paths to show (default: javascript)",
    )
    resolve.set_defaults(func=_handle_resolve)

    list_languages = subparsers.add_parser(
        "list-languages", help="List supported target languages"
    )
    list_languages.set_defaults(func=_handle_list_languages)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except (GeneratorError, RegistryError) as e:
        logger.debug("Command failed", exc_info=True)
        console.print(f"[red]✗[/red] {e}")
        return 1


def _handle_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    store = ConfigStore.from_file(args.classes)
    config = load_config(
        custom_config={
            "source_dir": args.source_dir,
            "js_output_dir": args.js_out,
            "py_output_dir": args.py_out,
            "max_workers": args.workers,
        },
        config_file=args.config,
    )

    registry = get_registry()
    known = [
        name
        for language in registry.list_languages()
        for name in [language, *registry.get_aliases_for_language(language)]
    ]
    for warning in get_config_manager().validate_config(config, known_languages=known):
        console.print(f"[yellow]⚠️  {warning}[/yellow]")

    console.print(f"📄 Loaded {len(store)} classes from [cyan]{args.classes}[/cyan]")
    for name, reason in store.invalid_classes.items():
        console.print(f"[yellow]⚠️  Invalid entry {name}: {escape(reason)}[/yellow]")

    report = WrapperPipeline(store, config, registry=registry).run(args.language)
    _print_report(report)

    return 0 if report.success else 1


def _print_report(report: PipelineReport) -> None:
    table = Table(
        title="📊 Generation Summary", box=box.ROUNDED, title_style="bold cyan"
    )
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Written", style="cyan", justify="right")
    table.add_column("Skipped", style="yellow", justify="right")
    table.add_column("Aggregation files", style="dim", justify="right")

    for name, language in report.languages.items():
        table.add_row(
            name,
            str(len(language.written)),
            str(len(language.skipped)),
            str(len(language.aggregated)),
        )

    console.print()
    console.print(table)

    if report.skipped:
        console.print("\n[yellow]⚠️  Skipped:[/yellow]")
        for result in report.skipped:
            console.print(f"  [yellow]•[/yellow] {result.label}: {result.error_message}")
        console.print()
    else:
        console.print("[green]✓[/green] All classes generated")


def _handle_resolve(args: argparse.Namespace) -> int:
    """Handle the resolve subcommand."""
    store = ConfigStore.from_file(args.classes)
    config = load_config(config_file=args.config)

    resolved = ConfigResolver(store).resolve(args.class_name)
    extras = ExtraDefinitionLocator(store).extra_definitions(resolved.class_name)

    generator = get_registry().create_generator(args.language, store, config)
    layout = generator.layout
    directory = (
        layout.directory_for(resolved.relative_path)
        if resolved.relative_path
        else layout.root
    )
    generating_file = layout.generated_path(directory, resolved.class_name)
    references = generator.references.resolve(resolved, generating_file)

    info_text = f"""[bold]Class:[/bold] {resolved.class_name}
[bold]Relative path:[/bold] {resolved.relative_path}
[bold]Superclass:[/bold] {resolved.super_class}
[bold]Ancestors:[/bold] {' -> '.join(resolved.ancestors) or '[dim]none[/dim]'}
[bold]Constructor args:[/bold] {', '.join(resolved.constructor_args) or '[dim]none[/dim]'}
[bold]Extra definitions:[/bold] {', '.join(extras) or '[dim]none[/dim]'}
[bold]Generated file:[/bold] {generating_file}"""

    console.print()
    console.print(
        Panel(info_text, title=f"🔧 {resolved.class_name}", border_style="green")
    )

    properties = Table(
        title="⚙️  Properties", box=box.SIMPLE, show_header=True, header_style="bold cyan"
    )
    properties.add_column("Name", style="bold")
    properties.add_column("Kind", style="green")
    properties.add_column("Default")
    properties.add_column("Origin", style="dim")
    for name, prop in resolved.all_properties.items():
        origin = "own" if name in resolved.properties else "inherited"
        if name in resolved.props_defined_externally:
            origin += ", external"
        properties.add_row(name, prop.kind.value, escape(repr(prop.default)), origin)

    console.print(properties)

    dependencies = Table(
        title=f"🔗 References ({generator.language_name})",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    dependencies.add_column("Key", style="bold")
    dependencies.add_column("Class")
    dependencies.add_column("Import path", style="green")
    dependencies.add_column("Override", style="dim")
    for key, reference in references.items():
        dependencies.add_row(
            key,
            reference.symbol,
            reference.import_path,
            "yes" if reference.is_override else "no",
        )

    console.print(dependencies)
    return 0


def _handle_list_languages(args: argparse.Namespace) -> int:
    """List supported languages with details."""
    registry = get_registry()

    table = Table(
        title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan"
    )
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aggregator", style="dim")
    table.add_column("Aliases", style="blue")

    for language in registry.list_languages():
        info = registry.get_language_info(language)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(
            language,
            info["file_extension"],
            info["class"],
            info["aggregator"] or "[dim]none[/dim]",
            aliases,
        )

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] wrapgen generate [dim]classes.json[/dim] --language [cyan]LANGUAGE[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
