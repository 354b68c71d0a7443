"""Compression of ascending line numbers into display ranges."""

from collections.abc import Iterable

RANGE_SEPARATOR = "</br>"


def compress_ranges(values: Iterable[int], separator: str = RANGE_SEPARATOR) -> str:
    """Compress ascending integers into "a-b" / "a" runs.

    Callers sort the input. A value equal to the previous one continues the
    current run, so adjacent duplicates are harmless; any other step that is
    not +1 closes the run.

    Examples:
        [1, 2, 3, 5, 7, 8] -> "1-3</br>5</br>7-8"
        [3, 3, 4] -> "3-4"
        [] -> ""
    """
    runs: list[str] = []
    start: int | None = None
    end = 0

    for value in values:
        if start is not None and value in (end, end + 1):
            end = value
            continue
        if start is not None:
            runs.append(_render_run(start, end))
        start = end = value

    if start is not None:
        runs.append(_render_run(start, end))

    return separator.join(runs)


def _render_run(start: int, end: int) -> str:
    return str(start) if start == end else f"{start}-{end}"
