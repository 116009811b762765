"""
Static lookup tables for polyphonic syncopation scoring.

Provides the metrical weight patterns (16th-note grid), the General MIDI drum
pitch to instrument label map, and the instrument interaction bonuses of the
Witek et al. (2014) polyphonic syncopation model:

    Witek, Clarke, Wallentin, Kringelbach & Vuust. Syncopation, Body-Movement
    and Pleasure in Groove Music. PLOS ONE 9(4): e94446, 2014.

All tables are immutable. Alternative metrical models are passed explicitly
to the builder and scorer instead of patching these constants.
"""

from types import MappingProxyType
from typing import Mapping, Sequence, Tuple, Union

from .exceptions import GridConfigurationError, UnknownInstrumentError

InteractionKey = Tuple[str, str]

# Metrical weights for one 4/4 bar of 16th notes. Lower is less salient.
WEIGHTS_16: Tuple[int, ...] = (
    0, -4, -3, -4,
    -2, -4, -3, -4,
    -1, -4, -3, -4,
    -2, -4, -3, -4,
)

# Two bars of the same pattern.
WEIGHTS_32: Tuple[int, ...] = WEIGHTS_16 + WEIGHTS_16

DEFAULT_INSTRUMENT_MAP: Mapping[int, str] = MappingProxyType({
    35: "BD",  # Acoustic bass drum
    36: "BD",  # Bass drum 1
    37: "SD",  # Side stick
    38: "SD",  # Acoustic snare
    42: "HH",  # Closed hi-hat
})

# Bonus for (previous onset token, current onset token) when the current
# onset is metrically weaker than the previous one.
DEFAULT_INTERACTIONS: Mapping[InteractionKey, int] = MappingProxyType({
    ("BD", "HH-SD"): 2,
    ("BD-HH", "HH-SD"): 2,
    ("SD", "BD-HH"): 1,
    ("HH-SD", "BD-HH"): 1,
    ("SD", "HH"): 5,
    ("BD", "HH"): 5,
})

INTERACTION_SEPARATOR = "_"
TOKEN_SEPARATOR = "-"


def tile_weights(base: Sequence[int], repeats: int) -> Tuple[int, ...]:
    """
    Concatenate a metrical weight pattern with itself.

    Args:
        base: Weight pattern for one cycle.
        repeats: Number of copies (>= 1).

    Returns:
        Tuple of len(base) * repeats weights.
    """
    if repeats < 1:
        raise ValueError(f"repeats must be >= 1, got {repeats}")
    return tuple(base) * repeats


def weights_for_grid(grid_length: int) -> Tuple[int, ...]:
    """Default weights for a grid made of whole 16-step bars."""
    if grid_length <= 0 or grid_length % len(WEIGHTS_16) != 0:
        raise GridConfigurationError(
            f"no default metrical weights for grid length {grid_length}; "
            f"supply a weight table of matching length"
        )
    return tile_weights(WEIGHTS_16, grid_length // len(WEIGHTS_16))


def lookup_instrument(pitch: int, instrument_map: Mapping[int, str]) -> str:
    """Return the instrument label for a pitch or raise UnknownInstrumentError."""
    try:
        return instrument_map[pitch]
    except KeyError:
        raise UnknownInstrumentError(pitch) from None


def format_interaction_key(previous: str, current: str) -> str:
    """Render a directional key in the composite "PREV_CURR" form."""
    return f"{previous}{INTERACTION_SEPARATOR}{current}"


def parse_interaction_table(
    table: Mapping[Union[str, InteractionKey], int]
) -> Mapping[InteractionKey, int]:
    """
    Normalize an interaction table to ordered-pair keys.

    Accepts tuple keys as-is and composite string keys such as "BD_HH-SD"
    (previous token "BD", current token "HH-SD").

    Args:
        table: Mapping from key to bonus.

    Returns:
        Read-only mapping keyed by (previous, current) token pairs.
    """
    parsed = {}
    for key, bonus in table.items():
        if isinstance(key, str):
            parts = key.split(INTERACTION_SEPARATOR)
            if len(parts) != 2 or not all(parts):
                raise GridConfigurationError(
                    f"interaction key {key!r} must look like 'PREV_CURR'"
                )
            key = (parts[0], parts[1])
        else:
            key = tuple(key)
            if len(key) != 2:
                raise GridConfigurationError(
                    f"interaction key {key!r} must be a (previous, current) pair"
                )
        parsed[key] = bonus
    return MappingProxyType(parsed)
