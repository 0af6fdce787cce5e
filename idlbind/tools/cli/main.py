import rich_click as click

from .settings import CONTEXT_SETTINGS
from .generate import generate
from .show import show


@click.group(context_settings=CONTEXT_SETTINGS)
def cli():
    # Initialize the CLI group
    pass


cli.add_command(generate)
cli.add_command(show)

if __name__ == "__main__":
    cli()
