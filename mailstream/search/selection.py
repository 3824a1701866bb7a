"""Selection handling."""

from .command import DEFAULT_DELIMITER


def resolve_identifier(candidate: str, delimiter: str = DEFAULT_DELIMITER) -> str:
    """Return the identifier of a selected candidate.

    Raises:
        ValueError: ``candidate`` does not contain ``delimiter``.
    """
    identifier, found, _ = candidate.partition(delimiter)
    if not found:
        raise ValueError(f"Not a search result: {candidate!r}")
    return identifier


def preserve_selection(
    old: list[str],
    new: list[str],
    old_index: int | None,
    same_input: bool,
) -> int | None:
    """Compute the selected index after the candidate list changed.

    While the input is unchanged the previously selected candidate keeps the
    cursor (by value, else by position). Otherwise the first candidate is
    preselected.
    """
    if not new:
        return None
    if same_input and old_index is not None and 0 <= old_index < len(old):
        try:
            return new.index(old[old_index])
        except ValueError:
            return min(old_index, len(new) - 1)
    return 0
