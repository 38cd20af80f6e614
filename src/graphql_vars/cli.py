"""Command-line interface for graphql-vars."""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click
from graphql.error import GraphQLError, GraphQLSyntaxError
from graphql.language import Source, parse

from .validate import validate_variables
from .version import version

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNDEFINED_VARIABLES = 1
EXIT_INVALID_INPUT = 2


def check_file(path: Path, max_errors: Optional[int] = None) -> List[GraphQLError]:
    """Parse a GraphQL document file and check its variables.

    Raises a GraphQLSyntaxError if the file is not a valid GraphQL document.
    """
    source = Source(path.read_text(encoding="utf-8"), str(path))
    document = parse(source)
    logger.debug("Parsed %s with %d definitions.", path, len(document.definitions))
    return validate_variables(document, max_errors=max_errors)


@click.command()
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--max-errors",
    type=click.IntRange(min=0),
    default=None,
    help="Stop checking a document after this many errors.",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Print the errors of each file as JSON.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging.",
)
@click.version_option(version, prog_name="graphql-vars")
def main(
    files: Tuple[Path, ...], max_errors: Optional[int], as_json: bool, verbose: bool
) -> None:
    """Check that GraphQL operations define all variables they use.

    Every operation in the given documents must define all variables used in its
    selections and in the fragments it spreads.

    Examples:

        graphql-vars queries.graphql

        graphql-vars --json --max-errors 10 src/**/*.graphql
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    exit_code = EXIT_OK
    report: Dict[str, List[Dict[str, Any]]] = {}
    for path in files:
        try:
            errors = check_file(path, max_errors)
        except GraphQLSyntaxError as error:
            click.echo(str(error), err=True)
            exit_code = EXIT_INVALID_INPUT
            continue
        except (OSError, UnicodeDecodeError) as error:
            click.echo(f"Cannot read {path}: {error}", err=True)
            exit_code = EXIT_INVALID_INPUT
            continue

        if errors and exit_code == EXIT_OK:
            exit_code = EXIT_UNDEFINED_VARIABLES
        if as_json:
            report[str(path)] = [error.formatted for error in errors]
        else:
            for error in errors:
                click.echo(str(error))
                click.echo()

    if as_json:
        click.echo(json.dumps(report, indent=2))
    sys.exit(exit_code)
