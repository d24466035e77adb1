"""Command-line interface for bibunify.

Provides CLI commands for unifying bibliographies.
"""

import importlib.metadata
import sys
from pathlib import Path

import click

from bibunify.scoring import Algorithm

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("bibunify")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"  # Fallback for development

_ALGORITHM_CHOICES = [a.value for a in Algorithm]


def _validate_output(ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    if value is not None and Path(value).suffix != ".bib":
        raise click.BadParameter("Output must be a path to a .bib file")
    return value


@click.group()
@click.version_option(version=__version__, prog_name="bibunify")
def cli() -> None:
    """Merge BibTeX bibliographies and remove duplicated entries.

    Use 'bibunify COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    callback=_validate_output,
    help="Path (directory + filename) to the desired output .bib file",
)
@click.option(
    "--silent",
    "-s",
    is_flag=True,
    help="Do not ask which repeated entry to keep (keep the first one found)",
)
@click.option(
    "--threshold",
    "-t",
    type=click.FloatRange(0.0, 1.0),
    default=1.0,
    show_default=True,
    help="Value between 0 and 1 to compare entry titles (1.0 disables fuzzy matching)",
)
@click.option(
    "--algorithm",
    "-a",
    type=click.Choice(_ALGORITHM_CHOICES, case_sensitive=False),
    default=Algorithm.LEVENSHTEIN.value,
    show_default=True,
    help="Algorithm to use to compare title similarity",
)
@click.option(
    "--biblatex",
    "-b",
    is_flag=True,
    help="Write entries in BibLaTeX format instead of BibTeX",
)
@click.option(
    "--events",
    type=click.Path(dir_okay=False),
    default=None,
    help="Append structured audit events to this JSONL file",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def unify(
    path: str,
    output: str | None,
    silent: bool,
    threshold: float,
    algorithm: str,
    biblatex: bool,
    events: str | None,
    verbose: bool,
) -> None:
    """Unify all .bib files in PATH into a single bibliography.

    Files whose name starts with '[bibunify]' (previous outputs) are ignored.
    Unless --silent is given, you are asked which entry to keep each time
    two entries look like the same publication.

    Examples
    --------
        bibunify unify refs/
        bibunify unify refs/ -s -t 0.9 -a jaro-winkler
        bibunify unify refs/ -o unified.bib --biblatex
    """
    from bibunify.api import unify as run_unify
    from bibunify.engine import UnifyConfig
    from bibunify.serialize import OutputFormat

    try:
        config = UnifyConfig(
            similarity_threshold=threshold,
            algorithm=Algorithm.from_name(algorithm),
            silent=silent,
            output_format=OutputFormat.BIBLATEX if biblatex else OutputFormat.BIBTEX,
        )

        if verbose:
            click.echo(f"Input: {path}", err=True)
            click.echo(f"Threshold: {config.similarity_threshold}", err=True)
            click.echo(f"Algorithm: {config.algorithm.value}", err=True)
            click.echo(f"Format: {config.output_format.value}", err=True)

        click.echo("Unifying bibliography...")
        result = run_unify(path, output=output, config=config, events_path=events)

        if verbose:
            click.echo(f"Files: {', '.join(result.files)}", err=True)
            click.echo(f"Records read: {result.total_records}", err=True)
            click.echo(f"Records written: {result.unique_records}", err=True)

        click.echo(f"Found {result.duplicates_removed} repetitions in the bibliography.")
        click.secho(
            f"✓ Unified bibliography was written to {result.output_path}",
            fg="green",
        )

    except Exception as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        if verbose:
            import traceback

            click.echo(traceback.format_exc(), err=True)
        sys.exit(1)


@cli.command()
@click.argument("title_a")
@click.argument("title_b")
@click.option(
    "--algorithm",
    "-a",
    type=click.Choice(_ALGORITHM_CHOICES, case_sensitive=False),
    default=Algorithm.LEVENSHTEIN.value,
    show_default=True,
    help="Algorithm to use",
)
@click.option(
    "--all",
    "all_algorithms",
    is_flag=True,
    help="Print the score of every algorithm",
)
def similarity(title_a: str, title_b: str, algorithm: str, all_algorithms: bool) -> None:
    """Print the similarity of TITLE_A and TITLE_B.

    Useful to choose a --threshold for 'bibunify unify'.

    Examples
    --------
        bibunify similarity "On Denoting" "On denoting."
        bibunify similarity "On Denoting" "On denoting." --all
    """
    from bibunify.scoring import score

    algorithms = list(Algorithm) if all_algorithms else [Algorithm.from_name(algorithm)]
    for algo in algorithms:
        click.echo(f"{algo.value}: {score(title_a, title_b, algo):.4f}")


if __name__ == "__main__":
    cli()
