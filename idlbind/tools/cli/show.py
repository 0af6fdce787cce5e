import sys
import rich_click as click
from rich.syntax import Syntax

from idlbind.diagnostics import Diagnostics
from idlbind.emitters import emit_entity
from idlbind.loader import LoaderError, find_entity
from idlbind.tree import is_entity

from .common import generator_options, make_config, make_console, setup_logging, load_or_exit, EXIT_LOAD_ERROR


@click.command(short_help="Display the generated module of one entity")
@click.argument("tree_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("name")
@generator_options
def show(tree_file, name, package_prefix, tuples, no_codec, compact, verbose, color):
    """Display the module generated for the entity NAME (e.g. shapes::Point)
    of TREE_FILE without writing anything."""
    console = make_console(color)
    setup_logging(console, verbose)

    roots = load_or_exit(console, tree_file)
    try:
        node = find_entity(roots, name)
    except LoaderError as e:
        console.print(f"[bold red] :police_car_light: {e}[/]")
        sys.exit(EXIT_LOAD_ERROR)

    if not is_entity(node):
        console.print(f"[bold red] :police_car_light: {name} is a module, pick an entity inside it.[/]")
        sys.exit(EXIT_LOAD_ERROR)

    diagnostics = Diagnostics()
    unit = emit_entity(node, make_config(".", package_prefix, tuples, no_codec, compact), diagnostics)

    console.print(f"[magenta]{unit.path}")
    console.print(Syntax(unit.text, "python"))
    if diagnostics.warning_count:
        console.print(f"[bold orange] :warning: {diagnostics.warning_count} warnings")
