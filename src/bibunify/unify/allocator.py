"""Citation key allocation for records entering a collection."""

from bibunify.models import Collection

__all__ = ["allocate_identifier"]


def allocate_identifier(preferred: str, collection: Collection) -> str:
    """Return a citation key that is free in ``collection``.

    Parameters
    ----------
    preferred : str
        Key the record currently carries.
    collection : Collection
        Collection the record is about to enter. Only read.

    Returns
    -------
    str
        ``preferred`` if free, otherwise the first free of
        ``preferred_1``, ``preferred_2``, ...

    Examples
    --------
        >>> allocate_identifier("Carnap1942", Collection())
        'Carnap1942'
    """
    if preferred not in collection:
        return preferred

    suffix = 1
    while f"{preferred}_{suffix}" in collection:
        suffix += 1
    return f"{preferred}_{suffix}"
