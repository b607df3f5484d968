"""Command-line argument handling."""

from collections.abc import Sequence

from metrics_probe.domain.enums import RunMode

_MODES = {
    "w": RunMode.WRITE,
    "r": RunMode.READ,
}


def parse_mode(argv: Sequence[str]) -> RunMode:
    """Map the single optional mode flag to a run mode.

    `w` writes, `r` reads (case-insensitive). Any other input, including no
    argument or more than one, runs both.
    """
    if len(argv) != 1:
        return RunMode.BOTH
    return _MODES.get(argv[0].strip().lower(), RunMode.BOTH)
