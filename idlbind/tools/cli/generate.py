import sys
import rich_click as click

from idlbind.generator import Generator

from .common import generator_options, make_config, make_console, setup_logging, load_or_exit, summary_table


@click.command(short_help="Generate Python bindings for a type tree")
@click.argument("tree_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-o",
    "--output",
    type=click.Path(file_okay=False),
    default=".",
    help="Directory below which the generated modules are written.",
)
@generator_options
def generate(tree_file, output, package_prefix, tuples, no_codec, compact, verbose, color):
    """Generate a Python module with a binary codec for every struct, union,
    enum, bitmask and typedef in TREE_FILE."""
    console = make_console(color)
    setup_logging(console, verbose)

    roots = load_or_exit(console, tree_file)
    config = make_config(output, package_prefix, tuples, no_codec, compact)
    result = Generator(config).generate(roots)

    console.print(summary_table(result))
    if result.success:
        console.print(f"[bold green]{result.summary()}[/]")
    else:
        console.print(f"[bold red] :police_car_light: {result.summary()}[/]")
        sys.exit(1)
