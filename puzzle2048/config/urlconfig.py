"""
Share a game configuration through URL-hash style parameters.

Example hashes::

    #size=5&target=4096
    #size=4&target=2048&spawn=2:0.8,4:0.2

Parsing is lenient: any parameter that is missing or invalid falls back to its default, so a
parsed configuration is always valid.
"""

from dataclasses import replace
from urllib.parse import parse_qs, urlencode

from .gameconfig import DEFAULT_GAME_CONFIG, DEFAULT_SPAWN_VALUES, GameConfig, SpawnConfig, is_power_of_two

# ##>: Parameter keys.
PARAM_SIZE = 'size'
PARAM_TARGET = 'target'
PARAM_SPAWN = 'spawn'

VALID_GRID_SIZES = (3, 4, 5, 6)
VALID_TARGET_VALUES = (128, 256, 512, 1024, 2048, 4096, 8192, 16384)

# ##>: Looser than validation: shared links are typed by hand.
PARSED_PROBABILITY_TOLERANCE = 0.01


def _parse_int(raw: str | None) -> int | None:
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def parse_grid_size(raw: str | None) -> int:
    """Return the grid size encoded in ``raw``, or the default."""
    size = _parse_int(raw)
    return size if size in VALID_GRID_SIZES else DEFAULT_GAME_CONFIG.grid_size


def parse_target_value(raw: str | None) -> int:
    """Return the target value encoded in ``raw``, or the default."""
    target = _parse_int(raw)
    return target if target in VALID_TARGET_VALUES else DEFAULT_GAME_CONFIG.target_value


def parse_spawn_values(raw: str | None) -> tuple[SpawnConfig, ...]:
    """
    Parse a spawn table written as ``value:probability`` pairs separated by commas.

    Parameters
    ----------
    raw : str | None
        The raw parameter, e.g. ``"2:0.9,4:0.1"``.

    Returns
    -------
    tuple[SpawnConfig, ...]
        The parsed table, renormalized to sum to exactly 1, or the default table.

    Notes
    -----
    - Entries whose value is not a power of two or whose probability is outside ``(0, 1]`` are
      dropped.
    - The remaining table is accepted only if its probabilities sum to 1 within 0.01.
    """
    if not raw:
        return DEFAULT_SPAWN_VALUES

    entries = []
    for part in raw.split(','):
        value_str, _, probability_str = part.strip().partition(':')
        value = _parse_int(value_str)
        try:
            probability = float(probability_str)
        except ValueError:
            continue
        if value is not None and is_power_of_two(value) and 0 < probability <= 1:
            entries.append((value, probability))

    total = sum(probability for _, probability in entries)
    if not entries or abs(total - 1.0) >= PARSED_PROBABILITY_TOLERANCE:
        return DEFAULT_SPAWN_VALUES
    return tuple(SpawnConfig(value, probability / total) for value, probability in entries)


def parse_config_from_hash(hash_string: str) -> GameConfig:
    """
    Build a configuration from a URL hash.

    Parameters
    ----------
    hash_string : str
        The hash, with or without its leading ``#``.

    Returns
    -------
    GameConfig
        The configuration described by the hash, with defaults for absent or invalid parameters.
    """
    query = hash_string[1:] if hash_string.startswith('#') else hash_string
    if not query:
        return DEFAULT_GAME_CONFIG

    params = {key: values[-1] for key, values in parse_qs(query, keep_blank_values=True).items()}
    return GameConfig(
        grid_size=parse_grid_size(params.get(PARAM_SIZE)),
        target_value=parse_target_value(params.get(PARAM_TARGET)),
        spawn_values=parse_spawn_values(params.get(PARAM_SPAWN)),
        max_undo_states=DEFAULT_GAME_CONFIG.max_undo_states,
    )


def spawn_values_equal(first: tuple[SpawnConfig, ...], second: tuple[SpawnConfig, ...]) -> bool:
    """Compare two spawn tables regardless of entry order."""
    if len(first) != len(second):
        return False
    pairs = zip(sorted(first, key=lambda sv: sv.value), sorted(second, key=lambda sv: sv.value))
    return all(a.value == b.value and abs(a.probability - b.probability) < 0.001 for a, b in pairs)


def serialize_spawn_values(spawn_values: tuple[SpawnConfig, ...]) -> str:
    """Write a spawn table as ``value:probability`` pairs."""
    return ','.join(f'{sv.value}:{sv.probability:g}' for sv in spawn_values)


def serialize_config_to_hash(config: GameConfig) -> str:
    """
    Write a configuration as a URL hash (without the leading ``#``).

    Only parameters that differ from the defaults are included, so the default configuration
    serializes to an empty string.
    """
    params = {}
    if config.grid_size != DEFAULT_GAME_CONFIG.grid_size:
        params[PARAM_SIZE] = str(config.grid_size)
    if config.target_value != DEFAULT_GAME_CONFIG.target_value:
        params[PARAM_TARGET] = str(config.target_value)
    if not spawn_values_equal(config.spawn_values, DEFAULT_SPAWN_VALUES):
        params[PARAM_SPAWN] = serialize_spawn_values(config.spawn_values)
    return urlencode(params, safe=':,')


def merge_config_with_hash(hash_string: str, **overrides) -> GameConfig:
    """Parse ``hash_string`` then replace the given fields."""
    return replace(parse_config_from_hash(hash_string), **overrides)
