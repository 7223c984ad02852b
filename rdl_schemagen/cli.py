"""
Command-line interface for schema class generation.

Reads the JSON form of a parsed RDL schema and writes the generated
SchemaBuilder class to a file or standard output.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen import (
    ConfigError,
    GeneratorConfig,
    RegistryError,
    generate_code,
    get_generator,
    get_language_info,
    list_all_language_info,
    list_supported_languages,
    load_config,
)
from .codegen.registry import is_language_supported
from .logging_config import configure_logging, get_logger
from .utils import SchemaLoaderError, load_schema

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Generated code goes to stdout; everything else goes to stderr
console = Console()
err_console = Console(stderr=True)


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="rdl-schemagen",
        description="Generate an RDL SchemaBuilder class from a JSON schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  rdl-schemagen example.json
  rdl-schemagen -o ExampleSchema.java --package-name com.example example.json
  rdl-schemagen --url https://example.com/schemas/example.json
  rdl-schemagen --stdin < example.json
  rdl-schemagen --list-languages
        """.strip(),
    )

    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="RDL schema JSON file")
    input_group.add_argument("--url", help="URL to fetch the schema JSON from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read the schema JSON from standard input"
    )

    parser.add_argument(
        "--language",
        "-l",
        default="java",
        help="Target language (default: java)",
    )
    parser.add_argument("--output", "-o", help="Output file (default: stdout)")
    parser.add_argument("--config", help="Configuration file path (JSON)")
    parser.add_argument(
        "--package-name",
        "--package",
        help="Package of the generated class (default: the schema namespace)",
    )
    parser.add_argument(
        "--class-name",
        help="Name of the generated class (default: <SchemaName>Schema)",
    )
    parser.add_argument(
        "--banner", help="Generator name written into the header comment"
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported languages and exit",
    )
    info_group.add_argument(
        "--language-info",
        metavar="LANGUAGE",
        help="Show detailed info about a language and exit",
    )

    output_group = parser.add_argument_group("output")
    verbosity = output_group.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging and show generation metadata",
    )
    verbosity.add_argument(
        "--quiet", "-q", action="store_true", help="Only log warnings and errors"
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point. Returns the process exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        if args.list_languages:
            return _list_languages()

        if args.language_info:
            return _show_language_info(args.language_info)

        if not (args.file or args.url or args.stdin):
            err_console.print(
                "[red]✗[/red] Input source required (file, --url, or --stdin)"
            )
            return 1

        if not _validate_language(args.language):
            return 1

        config = _build_config(args)
        return _generate_and_output(args, config)

    except CLIError as e:
        err_console.print(f"[red]✗ Error:[/red] {e}")
        logger.debug("CLI error", exc_info=True)
        return 1
    except KeyboardInterrupt:
        err_console.print("[yellow]Interrupted[/yellow]")
        return 130


def _list_languages() -> int:
    """List supported languages with details."""
    language_info = list_all_language_info()

    if not language_info:
        err_console.print("[yellow]⚠️ No code generators available[/yellow]")
        return 0

    table = Table(
        title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan"
    )
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for lang_name, info in sorted(language_info.items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(f"🔧 {lang_name}", info["file_extension"], info["class"], aliases)

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] rdl-schemagen [dim]schema.json[/dim] --language [cyan]LANGUAGE[/cyan]\n"
            "[bold]Info:[/bold] rdl-schemagen --language-info [cyan]LANGUAGE[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def _show_language_info(language: str) -> int:
    """Show detailed information about a specific language."""
    if not _validate_language(language, silent=True):
        err_console.print(f"[red]✗ Language '{language}' is not supported[/red]")
        err_console.print("[dim]Use --list-languages to see available options[/dim]")
        return 1

    info = get_language_info(language)
    config: GeneratorConfig = info["config"]

    info_text = f"""[bold]Language:[/bold] {info['name']}
[bold]File Extension:[/bold] {info['file_extension']}
[bold]Generator Class:[/bold] {info['class']}
[bold]Module:[/bold] {info['module']}"""

    if info["aliases"]:
        info_text += f"\n[bold]Aliases:[/bold] {', '.join(info['aliases'])}"

    console.print()
    console.print(
        Panel(info_text, title=f"🔧 {info['name'].title()} Generator", border_style="green")
    )

    config_table = Table(
        title="⚙️  Default Configuration",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    config_table.add_column("Setting", style="bold")
    config_table.add_column("Value", style="green")
    config_table.add_row("Package Name", config.package_name or "(schema namespace)")
    config_table.add_row("Class Name", config.class_name or "(<SchemaName>Schema)")
    config_table.add_row("Banner", config.banner)
    config_table.add_row("Runtime Namespace", config.runtime_namespace)

    console.print()
    console.print(config_table)

    examples_text = f"""Generate to stdout:
[cyan]rdl-schemagen --language {language} schema.json[/cyan]

Generate to file:
[cyan]rdl-schemagen -l {language} -o ExampleSchema{info['file_extension']} schema.json[/cyan]

Custom package name:
[cyan]rdl-schemagen -l {language} --package com.example schema.json[/cyan]"""

    console.print()
    console.print(Panel(examples_text, title="💡 Usage Examples", border_style="blue"))
    return 0


def _validate_language(language: str, silent: bool = False) -> bool:
    """Validate that a language is supported."""
    if not is_language_supported(language):
        if not silent:
            supported = list_supported_languages()
            err_console.print(f"[red]✗ Unsupported language '{language}'[/red]")
            err_console.print(f"[dim]Supported languages: {', '.join(supported)}[/dim]")
        return False
    return True


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from the config file and CLI overrides."""
    overrides = {
        "output_file": args.output,
        "package_name": args.package_name,
        "class_name": args.class_name,
        "banner": args.banner,
    }
    try:
        return load_config(
            args.language.lower(), custom_config=overrides, config_file=args.config
        )
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e


def _load_input(args: argparse.Namespace):
    """Load the schema from whichever input source was given."""
    source = args.file or args.url or "-"
    try:
        return load_schema(source)
    except (FileNotFoundError, SchemaLoaderError) as e:
        raise CLIError(str(e)) from e


def _generate_and_output(args: argparse.Namespace, config: GeneratorConfig) -> int:
    """Generate code and handle output with rich formatting."""
    language = args.language.lower()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=err_console,
        transient=True,
    ) as progress:
        load_task = progress.add_task("[cyan]Loading schema...", total=None)
        description, schema = _load_input(args)
        progress.remove_task(load_task)

        gen_task = progress.add_task(
            f"[green]Generating {language} code for {schema.name}...", total=None
        )
        try:
            generator = get_generator(language, config)
        except RegistryError as e:
            raise CLIError(str(e)) from e
        result = generate_code(generator, schema)
        progress.remove_task(gen_task)

    if not result.success:
        err_console.print(f"[red]✗ Code generation failed:[/red] {result.error_message}")
        if result.exception:
            err_console.print(f"[dim]Details: {result.exception!r}[/dim]")
        return 1

    if config.output_file:
        output_path = Path(config.output_file)
        try:
            output_path.write_text(result.code, encoding="utf-8")
        except OSError as e:
            err_console.print(f"[red]✗ Failed to write to {output_path}:[/red] {e}")
            return 1
        err_console.print(
            f"[green]✓[/green] Generated {result.metadata['class_name']} from "
            f"{description} saved to [cyan]{output_path}[/cyan]"
        )
    elif console.is_terminal:
        console.print(Syntax(result.code, language, theme="monokai"))
    else:
        # Piped output must be the exact generated source
        sys.stdout.write(result.code)
        sys.stdout.flush()

    if args.verbose and result.metadata:
        metadata_table = Table(
            title="📊 Generation Metadata",
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
        )
        metadata_table.add_column("Property", style="bold")
        metadata_table.add_column("Value", style="green")
        for key, value in result.metadata.items():
            metadata_table.add_row(key.replace("_", " ").title(), str(value))
        err_console.print()
        err_console.print(metadata_table)

    if result.warnings:
        err_console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            err_console.print(f"  [yellow]•[/yellow] {warning}")

    return 0
