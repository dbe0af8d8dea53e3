"""
Game configuration and its structural validation.

A configuration is fixed for the lifetime of a game: changing any field means starting a new game.
"""

from dataclasses import dataclass, field
from numbers import Real

# ##>: Validation bounds.
MIN_GRID_SIZE = 3
MAX_GRID_SIZE = 6
PROBABILITY_TOLERANCE = 0.001
DEFAULT_MAX_UNDO_STATES = 10


@dataclass(frozen=True)
class SpawnConfig:
    """
    One entry of the spawn table.

    Attributes
    ----------
    value : int
        Value of the spawned tile.
    probability : float
        Chance of spawning this value. Probabilities of a table sum to 1.
    """

    value: int
    probability: float


# ##: 90% chance of spawning a 2, 10% chance of spawning a 4.
DEFAULT_SPAWN_VALUES: tuple[SpawnConfig, ...] = (SpawnConfig(2, 0.9), SpawnConfig(4, 0.1))


@dataclass(frozen=True)
class GameConfig:
    """
    Configuration of a single game.

    Attributes
    ----------
    grid_size : int
        Side of the square grid, between 3 and 6.
    target_value : int
        Tile value that wins the game, a power of two.
    spawn_values : tuple[SpawnConfig, ...]
        Weighted table used to draw the value of each new tile.
    max_undo_states : int
        Maximum number of previous states kept for undo.
    """

    grid_size: int = 4
    target_value: int = 2048
    spawn_values: tuple[SpawnConfig, ...] = field(default=DEFAULT_SPAWN_VALUES)
    max_undo_states: int = DEFAULT_MAX_UNDO_STATES

    def __post_init__(self):
        # ##>: Accept any iterable of entries or (value, probability) pairs, store a tuple.
        entries = tuple(
            entry if isinstance(entry, SpawnConfig) else SpawnConfig(*entry) for entry in self.spawn_values or ()
        )
        object.__setattr__(self, 'spawn_values', entries)

    def to_dict(self) -> dict:
        """Plain representation used by serialization."""
        return {
            'grid_size': self.grid_size,
            'target_value': self.target_value,
            'spawn_values': [{'value': sv.value, 'probability': sv.probability} for sv in self.spawn_values],
            'max_undo_states': self.max_undo_states,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'GameConfig':
        """
        Build a configuration from its plain representation.

        No validation happens here; pass the result to ``validate_game_config``.

        Raises
        ------
        KeyError
            If a required field is missing.
        TypeError
            If the data or a spawn entry is not a mapping.
        """
        if not isinstance(data, dict):
            raise TypeError('config must be an object')
        spawn_values = data['spawn_values']
        if not isinstance(spawn_values, list):
            raise TypeError('spawn_values must be a list')
        return cls(
            grid_size=data['grid_size'],
            target_value=data['target_value'],
            spawn_values=tuple(SpawnConfig(value=sv['value'], probability=sv['probability']) for sv in spawn_values),
            max_undo_states=data.get('max_undo_states', DEFAULT_MAX_UNDO_STATES),
        )


DEFAULT_GAME_CONFIG = GameConfig()


def _is_integer(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def is_power_of_two(value) -> bool:
    """Check whether ``value`` is a positive integral power of two."""
    return _is_integer(value) and value > 0 and value & (value - 1) == 0


def validate_game_config(config: GameConfig) -> list[str]:
    """
    Collect every constraint the configuration violates.

    Parameters
    ----------
    config : GameConfig
        The configuration to check.

    Returns
    -------
    list[str]
        Human-readable violations, empty when the configuration is valid.

    Notes
    -----
    - The power-of-two check on the target only runs for positive integers, so a negative or
      fractional target yields a single violation.
    - Probabilities must sum to 1.0 within 0.001.
    """
    errors = []

    # ##: Grid size.
    if not _is_integer(config.grid_size) or not MIN_GRID_SIZE <= config.grid_size <= MAX_GRID_SIZE:
        errors.append(f'Grid size must be between {MIN_GRID_SIZE} and {MAX_GRID_SIZE}')

    # ##: Target value.
    if not _is_integer(config.target_value) or config.target_value <= 0:
        errors.append('Target value must be a positive integer')
    elif not is_power_of_two(config.target_value):
        errors.append('Target value should be a power of 2')

    # ##: Spawn table.
    if not config.spawn_values:
        errors.append('At least one spawn value must be configured')
    else:
        probabilities = [sv.probability for sv in config.spawn_values]
        if not all(_is_number(p) for p in probabilities):
            errors.append('Spawn probabilities must be numbers')
        elif abs(sum(probabilities) - 1.0) > PROBABILITY_TOLERANCE:
            errors.append('Spawn value probabilities must sum to 1.0')

        for entry in config.spawn_values:
            if not _is_integer(entry.value) or entry.value <= 0:
                errors.append('Spawn values must be positive integers')
            if _is_number(entry.probability) and not 0 <= entry.probability <= 1:
                errors.append('Spawn probabilities must be between 0 and 1')

    # ##: Undo history bound.
    if not _is_integer(config.max_undo_states) or config.max_undo_states < 0:
        errors.append('Max undo states must be a non-negative integer')

    return errors
