import sys
import logging
from typing import List

import rich_click as click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from idlbind.config import GeneratorConfig
from idlbind.diagnostics import GenerationResult
from idlbind.loader import LoaderError, load_file
from idlbind.tree import Node


EXIT_LOAD_ERROR = 2


def generator_options(func):
    """Options shared by every command that runs the emitters."""
    options = [
        click.option(
            "-p",
            "--package-prefix",
            type=str,
            default=None,
            help="Dotted prefix prepended to every generated namespace.",
        ),
        click.option(
            "--tuples",
            type=bool,
            is_flag=True,
            help="Declare and decode sequences as tuples instead of lists.",
        ),
        click.option(
            "--no-codec",
            type=bool,
            is_flag=True,
            help="Do not generate encode and decode methods.",
        ),
        click.option(
            "--compact",
            type=bool,
            is_flag=True,
            help="Generate structs as frozen, record-like dataclasses.",
        ),
        click.option(
            "-v", "--verbose", type=bool, is_flag=True, help="Log every generation step."
        ),
        click.option(
            "--color",
            type=click.Choice(["auto", "standard", "256", "truecolor", "windows", "none"]),
            default="auto",
            help="""Force the command to output with/without terminal colors. By default output colours if the terminal supports it."
See the [underline blue][link=https://rich.readthedocs.io/en/stable/console.html#color-systems]Rich documentation[/link][/] for more info on what the options mean.""",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def make_console(color: str) -> Console:
    return Console(color_system=None if color == "none" else color)


def setup_logging(console: Console, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=verbose)],
        force=True,
    )


def make_config(output, package_prefix, tuples, no_codec, compact) -> GeneratorConfig:
    return GeneratorConfig(
        output_directory=output,
        namespace_prefix=package_prefix,
        use_collection_for_sequences=not tuples,
        disable_codec_generation=no_codec,
        generate_compact_declaration_form=compact,
    )


def load_or_exit(console: Console, tree_file: str) -> List[Node]:
    try:
        return load_file(tree_file)
    except (LoaderError, OSError) as e:
        console.print(f"[bold red] :police_car_light: Could not load {tree_file}: {e}[/]")
        sys.exit(EXIT_LOAD_ERROR)


def summary_table(result: GenerationResult) -> Table:
    table = Table("Kind", "Count", title="Generated entities")
    for kind in ("module", "struct", "union", "enum", "bitmask", "typedef"):
        table.add_row(kind, str(result.counts[kind]))
    table.add_row("warnings", str(result.warning_count))
    table.add_row("errors", str(result.error_count), style="red" if result.error_count else None)
    return table
