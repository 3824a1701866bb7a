"""Candidate display with query terms highlighted."""

from rich.text import Text

from .command import DEFAULT_DELIMITER

DEFAULT_PALETTE: tuple[str, ...] = (
    "bold red",
    "bold green",
    "bold yellow",
    "bold blue",
    "bold magenta",
    "bold cyan",
)
NEUTRAL_CLASS = 0
EXTRA_FIELD_STYLE = "dim"


def query_keys(query: str) -> list[str]:
    """Split a query into lowercased keys."""
    return query.lower().split()


def highlight_tokens(text: str, query: str, palette_size: int) -> list[tuple[str, int]]:
    """Assign a highlight class to every whitespace-separated token of ``text``.

    A token matching a query key gets class ``position % palette_size + 1``,
    where position is the key's first index in the query. Other tokens get
    ``NEUTRAL_CLASS``.
    """
    positions: dict[str, int] = {}
    for i, key in enumerate(query_keys(query)):
        positions.setdefault(key, i)
    classes = []
    for token in text.split():
        position = positions.get(token.lower())
        classes.append((token, NEUTRAL_CLASS if position is None else position % palette_size + 1))
    return classes


def format_candidate(
    candidate: str,
    query: str,
    delimiter: str = DEFAULT_DELIMITER,
    palette: tuple[str, ...] = DEFAULT_PALETTE,
) -> Text | None:
    """Render a candidate for display, or None if it has fewer than two fields."""
    fields = candidate.split(delimiter)
    if len(fields) < 2:
        return None
    text = Text()
    for i, (token, cls) in enumerate(highlight_tokens(fields[1], query, len(palette))):
        if i:
            text.append(" ")
        text.append(token, style=palette[cls - 1] if cls != NEUTRAL_CLASS else "")
    for extra in fields[2:]:
        if extra:
            text.append("  ")
            text.append(extra, style=EXTRA_FIELD_STYLE)
    return text
