"""Dice expression parser.

Supports the notation: [count]d<size>[+/-modifier], a bare signed integer
for a flat modifier, and a handful of named macros.
Examples: 4d6, d20, 2d6+3, 1d20-2, 5, adv, stats.
"""

from __future__ import annotations

import enum
import logging
import re
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

_UNSIGNED_RE = re.compile(r"^\+?[0-9]+$")
_SIGNED_RE = re.compile(r"^[+-]?[0-9]+$")

# Counts and die sizes are 32-bit unsigned, modifiers 32-bit signed.
_MAX_UNSIGNED = 2**32 - 1
_MIN_SIGNED = -(2**31)
_MAX_SIGNED = 2**31 - 1


class DiceError(ValueError):
    """Raised when a dice expression is invalid."""

    message = "invalid roll format"

    def __init__(self, token: str = "") -> None:
        super().__init__(self.message)
        self.token = token


class NoDieSpecified(DiceError):
    message = "invalid roll format: no die specified"


class InvalidDieFormat(DiceError):
    message = "invalid roll format: invalid die format"


class InvalidModifierFormat(DiceError):
    message = "invalid roll format: invalid modifier format"


class Exclusion(str, enum.Enum):
    """Which single die, if any, is dropped from a multi-die total."""

    none = "none"
    drop_lowest = "low"
    drop_highest = "high"


class RollSpec(BaseModel):
    """A single parsed roll request."""

    model_config = ConfigDict(frozen=True)

    count: int = Field(default=1, ge=0)
    die_size: int = Field(default=0, ge=0)
    modifier: int = 0
    exclusion: Exclusion = Exclusion.none


# ---------------------------------------------------------------------------
# Macros
# ---------------------------------------------------------------------------

_ADVANTAGE = RollSpec(count=2, die_size=20, exclusion=Exclusion.drop_lowest)
_DISADVANTAGE = RollSpec(count=2, die_size=20, exclusion=Exclusion.drop_highest)
_CHAOS_BOLT = [RollSpec(count=2, die_size=8), RollSpec(count=1, die_size=6)]
_ABILITY_SCORE = RollSpec(count=4, die_size=6, exclusion=Exclusion.drop_lowest)
_TINY_OBJECT = RollSpec(count=1, die_size=20, modifier=8)

MACROS: dict[str, list[RollSpec]] = {
    "adv": [_ADVANTAGE],
    "advantage": [_ADVANTAGE],
    "dis": [_DISADVANTAGE],
    "disadvantage": [_DISADVANTAGE],
    "chaos": _CHAOS_BOLT,
    "chaos_bolt": _CHAOS_BOLT,
    "stats": [_ABILITY_SCORE] * 6,
    "char": [_ABILITY_SCORE] * 6,
    "character": [_ABILITY_SCORE] * 6,
    # Animate Objects on ten tiny objects: +8 to hit each.
    "tiny-objects": [_TINY_OBJECT] * 10,
    "tiny": [_TINY_OBJECT] * 10,
    "animate-objects": [_TINY_OBJECT] * 10,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def _to_unsigned(text: str, token: str) -> int:
    if not _UNSIGNED_RE.match(text):
        raise InvalidDieFormat(token)
    value = int(text)
    if value > _MAX_UNSIGNED:
        raise InvalidDieFormat(token)
    return value


def _to_signed(text: str, error: type[DiceError], token: str) -> int:
    if not _SIGNED_RE.match(text):
        raise error(token)
    value = int(text)
    if not _MIN_SIGNED <= value <= _MAX_SIGNED:
        raise error(token)
    return value


def parse(token: str) -> RollSpec:
    """Parse a single dice expression into a RollSpec.

    Macros are not recognised here; see expand().

    Args:
        token: Dice expression, e.g. "2d6+3", "d20" or "-1".

    Returns:
        The parsed RollSpec.

    Raises:
        NoDieSpecified: The token has no "d" and is not a 32-bit signed integer.
        InvalidDieFormat: The count or die size is not a 32-bit unsigned integer.
        InvalidModifierFormat: The modifier is not a 32-bit signed integer.
    """
    count_text, sep, tail = token.partition("d")
    if not sep:
        modifier = _to_signed(token, NoDieSpecified, token)
        return RollSpec(count=1, die_size=0, modifier=modifier)

    count = _to_unsigned(count_text, token) if count_text else 1

    signs = [i for i in (tail.find("+"), tail.find("-")) if i >= 0]
    if signs:
        split = min(signs)
        die_text, mod_text = tail[:split], tail[split:]
        die_size = _to_unsigned(die_text, token)
        modifier = _to_signed(mod_text, InvalidModifierFormat, token)
    else:
        die_size = _to_unsigned(tail, token)
        modifier = 0

    return RollSpec(count=count, die_size=die_size, modifier=modifier)


def expand(token: str) -> list[RollSpec]:
    """Expand a token into its roll requests: a macro's fixed list, or one parsed spec."""
    if token in MACROS:
        specs = list(MACROS[token])
        logger.debug("Expanded macro %r into %d roll(s)", token, len(specs))
        return specs
    spec = parse(token)
    logger.debug("Parsed %r as %r", token, spec)
    return [spec]


def parse_args(tokens: Iterable[str]) -> list[RollSpec]:
    """Parse every token, in order, into one flat list of roll requests.

    Parsing is all-or-nothing: the first invalid token raises and no
    partial list is returned.

    Args:
        tokens: Command-line tokens (macros or dice expressions).

    Returns:
        The flattened, ordered list of RollSpec.

    Raises:
        DiceError: If any token is invalid.
    """
    specs: list[RollSpec] = []
    for token in tokens:
        specs.extend(expand(token))
    return specs
