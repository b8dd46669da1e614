"""hazardous CLI - main entry point and command registration."""

import click

from hazardous import __version__


@click.group()
@click.version_option(version=__version__, prog_name="hazardous")
@click.help_option("-h", "--help")
def cli():
    """hazardous - find rm -rf footguns in shell scripts, Makefiles and Go

    \b
    QUICK START:
      hazardous scan ./...                  # Scan the current tree
      hazardous scan --resolve-paths ./...  # Only report rm -rf on / or /*
      hazardous rules                       # Show what is being checked

    \b
    For detailed options: hazardous <command> --help"""
    pass


from hazardous.commands.rules import rules
from hazardous.commands.scan import scan

cli.add_command(scan)
cli.add_command(rules)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == "__main__":
    main()
