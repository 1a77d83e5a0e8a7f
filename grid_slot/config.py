"""
Game and process configuration.

Game definitions live in ``slots/<short_name>/gameConfig.json`` and are
loaded into an immutable :class:`GameConfig`. Process settings come from
GRID_SLOT_* environment variables (optionally from a ``.env`` file).
"""
import os
import json
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv
from marshmallow import ValidationError

from grid_slot.config_validator import validate_settings, DEFAULT_GAME
from grid_slot.exceptions import ConfigurationException
from grid_slot.schemas import GameConfigSchema

load_dotenv()

logger = logging.getLogger(__name__)

SLOT_CONFIG_BASE_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'slots')


@dataclass(frozen=True)
class GameConfig:
    """Static tables and rules for one slot game."""
    name: str
    short_name: str
    rows: int
    columns: int
    symbols: Tuple[str, ...]
    weights: Tuple[float, ...]
    pay_table: Mapping[str, float]
    wild_symbol: str
    scatter_symbol: str
    colors: Mapping[str, Optional[str]]
    scatter_min_count: int
    scatter_step: float
    bet_levels: Tuple[int, ...]
    default_bet_index: int
    start_balance: int
    bonus_amount: int
    min_run_length: int = 3

    @property
    def standard_symbols(self) -> Tuple[str, ...]:
        return tuple(s for s in self.symbols if s in self.pay_table)

    @property
    def best_symbol(self) -> str:
        """Standard symbol with the highest base pay; all-wild runs pay as this."""
        return max(self.pay_table, key=self.pay_table.get)

    def probability(self, symbol: str) -> float:
        return self.weights[self.symbols.index(symbol)] / sum(self.weights)


def build_game_config(raw_config, slot_short_name='<inline>') -> GameConfig:
    """
    Validates a raw gameConfig dictionary and turns it into a GameConfig.

    Raises:
        ConfigurationException: If the structure or content is invalid.
    """
    try:
        loaded = GameConfigSchema().load(raw_config)
    except ValidationError as e:
        raise ConfigurationException(
            f"Config validation error for slot '{slot_short_name}'",
            details=e.messages
        )

    game = loaded['game']
    symbols = game['symbols']
    return GameConfig(
        name=game['name'],
        short_name=game['short_name'],
        rows=game['layout']['rows'],
        columns=game['layout']['columns'],
        symbols=tuple(s['id'] for s in symbols),
        weights=tuple(float(s['weight']) for s in symbols),
        pay_table=MappingProxyType({s['id']: s['base_pay'] for s in symbols if 'base_pay' in s}),
        wild_symbol=next(s['id'] for s in symbols if s['is_wild']),
        scatter_symbol=next(s['id'] for s in symbols if s['is_scatter']),
        colors=MappingProxyType({s['id']: s['color'] for s in symbols}),
        scatter_min_count=game['scatter']['min_count'],
        scatter_step=game['scatter']['step'],
        bet_levels=tuple(game['bet_levels']),
        default_bet_index=game['default_bet_index'],
        start_balance=game['start_balance'],
        bonus_amount=game['bonus_amount'],
        min_run_length=game['min_run_length'],
    )


def load_game_config(slot_short_name=DEFAULT_GAME, base_path=None) -> GameConfig:
    """
    Loads ``<base_path>/<slot_short_name>/gameConfig.json`` and validates it.

    Args:
        slot_short_name (str): Directory name of the game.
        base_path (str, optional): Directory holding the game folders.
            Defaults to the ``slots`` directory shipped with the package.

    Raises:
        ConfigurationException: If the file is missing, is not valid JSON
            or fails validation.
    """
    base_dir = base_path or SLOT_CONFIG_BASE_PATH
    file_path = os.path.join(base_dir, slot_short_name, "gameConfig.json")

    if not os.path.exists(file_path):
        logger.error(f"Configuration file not found for slot '{slot_short_name}' at {file_path}")
        raise ConfigurationException(
            f"Configuration file not found for slot '{slot_short_name}' at {file_path}",
            details={'path': file_path}
        )

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            raw_config = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationException(
            f"Invalid JSON in {file_path}: {e.msg} (line {e.lineno}, col {e.colno})",
            details={'path': file_path}
        )

    game_config = build_game_config(raw_config, slot_short_name)
    logger.info(f"Loaded config for '{slot_short_name}' from {file_path}")
    return game_config


class Config:
    """Process settings validated from the environment."""

    def __init__(self, environ=None):
        validated = validate_settings(environ)
        self.GAME = validated['GAME']
        self.START_BALANCE = validated['START_BALANCE']
        self.AUTO_SPIN_DELAY = validated['AUTO_SPIN_DELAY']
        self.LOG_JSON = validated['LOG_JSON']
        self.DEBUG = validated['DEBUG']
