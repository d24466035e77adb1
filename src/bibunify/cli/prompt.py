"""Terminal prompt used to resolve probable duplicates interactively."""

import click

__all__ = ["terminal_prompt_choice"]


def terminal_prompt_choice(rendered_a: str, rendered_b: str) -> int:
    """Show two similar entries and ask which to keep.

    Blocks until the user enters 1 (keep the first), 2 (keep the second)
    or 3 (keep both); any other input is rejected and asked again.

    Parameters
    ----------
    rendered_a : str
        Entry already in the unified bibliography.
    rendered_b : str
        Incoming entry.

    Returns
    -------
    int
        1, 2 or 3.
    """
    click.echo(
        f"Entries:\n\n1- {rendered_a}\n\n2- {rendered_b}\n\n"
        "are similar. Do you wish to keep the first (1), the second (2) or both (3)?"
    )
    choice = click.prompt("Enter your choice", type=click.IntRange(1, 3))
    click.echo()
    return int(choice)
