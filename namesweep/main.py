from __future__ import annotations

import sys
from typing import Optional

import typer

from namesweep.config import get_settings
from namesweep.errors import NameSweepError
from namesweep.orchestrator import SweepConfig, run_sweep
from namesweep.reporter import print_summary
from namesweep.utils.logging import configure_logging, get_logger

log = get_logger(__name__)

app = typer.Typer(help="Sweep fixed-length lowercase names against the username endpoint.")


def parse_word_length(raw: Optional[str], default: int) -> int:
    """
    Interpret the positional word length.

    Missing, non-numeric or negative values fall back to ``default``.
    """
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        log.debug(f"Ignoring unparsable word length {raw!r}, using {default}")
        return default
    if value < 0:
        log.debug(f"Ignoring negative word length {value}, using {default}")
        return default
    return value


@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
def run(
    word_length: Optional[str] = typer.Argument(
        None,
        metavar="[WORD_LENGTH]",
        help="Length of the names to check (default from settings, 2).",
        show_default=False,
    ),
) -> None:
    """
    Check every lowercase name of WORD_LENGTH letters and append the available
    ones to the output file.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)
    length = parse_word_length(word_length, settings.default_word_length)
    config = SweepConfig.from_settings(settings, word_length=length)

    try:
        summary = run_sweep(config)
    except NameSweepError as exc:
        log.error(str(exc))
        raise typer.Exit(code=1) from exc

    print_summary(summary)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
