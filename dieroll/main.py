"""Command-line driver: dieroll <token> [<token> ...]."""

from __future__ import annotations

import logging
import os
import random
import sys
from collections.abc import Sequence
from typing import TextIO

from dieroll.config import settings
from dieroll.dice import DiceError, parse_args
from dieroll.rolling import create_rng, simulate

logger = logging.getLogger(__name__)


def main(
    argv: Sequence[str],
    rng: random.Random | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Parse argv[1:], roll every request and print the traces.

    Args:
        argv: Full argument vector; argv[0] names the program in messages.
        rng: Random source shared by all rolls. Created from settings if omitted.
        out: Stream for roll lines and user-facing errors (default stdout).
        err: Stream for skipped-roll notices (default stderr).

    Returns:
        Process exit status, always 0.
    """
    if out is None:
        out = sys.stdout
    if err is None:
        err = sys.stderr
    prog = os.path.basename(argv[0]) if argv else "dieroll"

    if len(argv) < 2:
        print(f"{prog}: no dice specified", file=out)
        return 0

    try:
        specs = parse_args(argv[1:])
    except DiceError as exc:
        logger.info("Rejected token %r: %s", exc.token, exc)
        print(f"{prog}: {exc}", file=out)
        return 0

    if rng is None:
        rng = create_rng(settings.seed)
    results: list[int | None] = []
    for spec in specs:
        trace, result = simulate(spec, rng)
        print(trace, file=out)
        results.append(result)

    if len(specs) > 1:
        total = 0
        for result in results:
            if result is None:
                print("error has occurred", file=err)
                continue
            total += result
        print(f"Total roll: {total}", file=out)
    return 0


def run() -> None:
    """Console-script entry point: configure logging and roll sys.argv."""
    logging.basicConfig(
        level=settings.log_level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(main(sys.argv))
