"""Resolution policy for probable duplicates."""

from bibunify.engine.config import UnifyConfig
from bibunify.models import Record
from bibunify.serialize import format_record
from bibunify.unify.models import PromptChoice, Resolution

__all__ = ["resolve", "CHOICES"]

CHOICES: dict[int, Resolution] = {
    1: Resolution.KEEP_INCUMBENT,
    2: Resolution.KEEP_CANDIDATE,
    3: Resolution.KEEP_BOTH,
}


def resolve(
    incumbent: Record,
    candidate: Record,
    config: UnifyConfig,
    prompt_choice: PromptChoice | None = None,
) -> Resolution:
    """Decide which record of a duplicate pair to keep.

    Parameters
    ----------
    incumbent : Record
        Record already in the unified collection.
    candidate : Record
        Incoming record judged a duplicate of ``incumbent``.
    config : UnifyConfig
        Run configuration (``silent`` and ``output_format`` are used).
    prompt_choice : PromptChoice | None, optional
        Callable receiving both rendered records and returning 1 (keep
        first), 2 (keep second) or 3 (keep both). Asked again until it
        answers with one of those. Required unless ``config.silent``.

    Returns
    -------
    Resolution
        KEEP_INCUMBENT in silent mode, otherwise the mapped choice.

    Raises
    ------
    ValueError
        If not silent and no prompt is available.
    """
    if config.silent:
        return Resolution.KEEP_INCUMBENT

    if prompt_choice is None:
        raise ValueError("Interactive resolution requires a prompt_choice callable")

    rendered_incumbent = format_record(incumbent, config.output_format)
    rendered_candidate = format_record(candidate, config.output_format)

    while True:
        choice = prompt_choice(rendered_incumbent, rendered_candidate)
        # bool and float compare equal to the int keys
        if type(choice) is int and choice in CHOICES:
            return CHOICES[choice]
