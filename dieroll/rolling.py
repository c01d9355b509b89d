"""Roll simulation and trace formatting.

Each roll prints as one trace line: "[<header>] <detail>", e.g.

    [4d6 - low] 3, (1), 5, 6, final = 14
    [d20+5] 17
    [0d6] no dice rolled
"""

from __future__ import annotations

import logging
import random

from pydantic import BaseModel, ConfigDict

from dieroll.dice import Exclusion, RollSpec

logger = logging.getLogger(__name__)

NO_DICE = "no dice rolled"

_EXCLUSION_LABELS: dict[Exclusion, str] = {
    Exclusion.drop_lowest: " - low",
    Exclusion.drop_highest: " - high",
}


class RollOutcome(BaseModel):
    """The draws and final result of simulating one RollSpec."""

    model_config = ConfigDict(frozen=True)

    spec: RollSpec
    draws: list[int] = []
    dropped_index: int | None = None
    result: int | None = None

    @property
    def trace(self) -> str:
        return f"[{format_header(self.spec)}] {format_detail(self)}"


def create_rng(seed: int | None = None) -> random.Random:
    """Return the random source for this process, seeded from OS entropy unless seed is given."""
    return random.Random(seed)


def format_header(spec: RollSpec) -> str:
    """Render the bracketed part of a trace line, e.g. "2d6+3" or "2d20 - low"."""
    parts: list[str] = []
    if spec.count != 1:
        parts.append(str(spec.count))
    if spec.die_size != 0:
        parts.append(f"d{spec.die_size}")
    if spec.modifier != 0:
        # Signed once anything precedes it, so "3" and "+5" never run together.
        parts.append(f"{spec.modifier:+d}" if parts else str(spec.modifier))
    parts.append(_EXCLUSION_LABELS.get(spec.exclusion, ""))
    return "".join(parts)


def format_detail(outcome: RollOutcome) -> str:
    if outcome.result is None:
        return NO_DICE
    if len(outcome.draws) <= 1:
        return str(outcome.result)
    rendered = [
        f"({value})" if i == outcome.dropped_index else str(value)
        for i, value in enumerate(outcome.draws)
    ]
    return f"{', '.join(rendered)}, final = {outcome.result}"


def _excluded(draws: list[int], exclusion: Exclusion) -> tuple[int, int | None]:
    """Return (excluded value, index of its first occurrence) for the given rule."""
    if exclusion is Exclusion.drop_lowest:
        value = min(draws)
    elif exclusion is Exclusion.drop_highest:
        value = max(draws)
    else:
        return 0, None
    return value, draws.index(value)


def roll(spec: RollSpec, rng: random.Random) -> RollOutcome:
    """Simulate a roll and return its full outcome.

    A single die ignores the exclusion rule. Several dice of size 0 are
    not a meaningful roll and are reported like a zero-dice roll.

    Args:
        spec: The roll request.
        rng: Random source; each die is drawn with rng.randint(1, die_size).

    Returns:
        The RollOutcome; its result is None when no dice were rolled.
    """
    if spec.count == 0 or (spec.count > 1 and spec.die_size == 0):
        return RollOutcome(spec=spec)

    if spec.count == 1:
        draw = rng.randint(1, spec.die_size) if spec.die_size else 0
        draws = [draw] if spec.die_size else []
        return RollOutcome(spec=spec, draws=draws, result=draw + spec.modifier)

    draws = [rng.randint(1, spec.die_size) for _ in range(spec.count)]
    excluded, dropped_index = _excluded(draws, spec.exclusion)
    logger.debug("Rolled %dd%d: %s (dropping %s)", spec.count, spec.die_size, draws, dropped_index)
    return RollOutcome(
        spec=spec,
        draws=draws,
        dropped_index=dropped_index,
        result=sum(draws) + spec.modifier - excluded,
    )


def simulate(spec: RollSpec, rng: random.Random) -> tuple[str, int | None]:
    """Simulate a roll and return its trace line and numeric result (None if no dice rolled)."""
    outcome = roll(spec, rng)
    return outcome.trace, outcome.result
