"""CLI entry point for typemake."""

import logging
import sys
from pathlib import Path

import click

from typemake.config import DEFAULT_TYPEFILE, RunConfig
from typemake.errors import ParseError, TypefileReadError
from typemake.runner import dump, run


@click.command()
@click.option(
    "--typefile",
    "typefile",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_TYPEFILE,
    show_default=True,
    help="The root typefile to execute",
)
@click.option("--verbose", "-v", "verbose", is_flag=True, help="Log debug output")
@click.option("--dump", "dump_result", is_flag=True, help="Print the parsed typefile")
@click.version_option(package_name="typemake")
def main(typefile: Path, verbose: bool, dump_result: bool) -> None:
    """Parse a typefile and report its tools."""
    config = RunConfig(typefile=typefile, verbose=verbose, dump=dump_result)
    logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        parsed = run(config)
    except TypefileReadError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)
    except ParseError as e:
        click.echo(f"parse error:\n{e}", err=True)
        sys.exit(1)

    if config.dump:
        click.echo(dump(parsed), nl=False)


if __name__ == "__main__":
    main()
