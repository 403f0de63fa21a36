"""CLI entry point for zenflow."""

import click

from . import __version__
from .commands import check, generate, library, studio
from .commands.base import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="zenflow")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(verbose: bool):
    """zenflow: AI-assisted yoga flow builder.

    Build a sequence of poses by hand or from a description of how you
    feel, check it for anatomical safety, and practice it with a narrated
    guided session.

    Example usage:

        # Browse the pose library
        zenflow library list --category Seated

        # Check a hand-built flow
        zenflow check balasana marjaryasana adho_mukha shavasana

        # Generate and narrate a flow
        zenflow generate "gentle flow for lower back tension" --practice

        # Build interactively
        zenflow studio
    """
    setup_logging(verbose)


# Register commands
main.add_command(library)
main.add_command(check)
main.add_command(generate)
main.add_command(studio)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
