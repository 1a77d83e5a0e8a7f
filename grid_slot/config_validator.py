"""
Environment validation for process-level settings.

Every GRID_SLOT_* variable is checked up front and all problems are
reported together, so a bad .env file fails before the first spin.
"""

import os
import re
import logging
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_GAME = 'classic_10x10'
DEFAULT_AUTO_SPIN_DELAY = 0.25
TRUE_VALUES = ('true', '1', 't', 'yes', 'on')
FALSE_VALUES = ('false', '0', 'f', 'no', 'off')


class ConfigValidationError(Exception):
    """Raised when one or more settings are missing or invalid."""

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class ConfigValidator:
    """Validates GRID_SLOT_* environment settings."""

    def __init__(self, environ=None):
        self.environ = os.environ if environ is None else environ
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def validate_game_name(self, var_name: str = 'GRID_SLOT_GAME') -> str:
        value = self.environ.get(var_name, '').strip()
        if not value:
            return DEFAULT_GAME
        if not re.match(r'^[A-Za-z0-9_\-]+$', value):
            self.errors.append(f"{var_name} may only contain letters, digits, '_' and '-' (got '{value}')")
            return DEFAULT_GAME
        return value

    def validate_optional_int(self, var_name: str, minimum: int = 0) -> Optional[int]:
        raw = self.environ.get(var_name, '').strip()
        if not raw:
            return None
        try:
            value = int(raw)
        except ValueError:
            self.errors.append(f"{var_name} must be an integer (got '{raw}')")
            return None
        if value < minimum:
            self.errors.append(f"{var_name} must be >= {minimum} (got {value})")
            return None
        return value

    def validate_float(self, var_name: str, default: float, minimum: float = 0.0) -> float:
        raw = self.environ.get(var_name, '').strip()
        if not raw:
            return default
        try:
            value = float(raw)
        except ValueError:
            self.errors.append(f"{var_name} must be a number (got '{raw}')")
            return default
        if value < minimum:
            self.errors.append(f"{var_name} must be >= {minimum} (got {value})")
            return default
        return value

    def validate_bool(self, var_name: str, default: bool = False) -> bool:
        raw = self.environ.get(var_name, '').strip().lower()
        if not raw:
            return default
        if raw in TRUE_VALUES:
            return True
        if raw in FALSE_VALUES:
            return False
        self.warnings.append(f"{var_name} has unrecognised value '{raw}', using {default}")
        return default

    def validate_all(self) -> Dict[str, object]:
        settings = {
            'GAME': self.validate_game_name(),
            'START_BALANCE': self.validate_optional_int('GRID_SLOT_START_BALANCE', minimum=0),
            'AUTO_SPIN_DELAY': self.validate_float('GRID_SLOT_AUTO_SPIN_DELAY', DEFAULT_AUTO_SPIN_DELAY),
            'LOG_JSON': self.validate_bool('GRID_SLOT_LOG_JSON'),
            'DEBUG': self.validate_bool('GRID_SLOT_DEBUG'),
        }
        for warning in self.warnings:
            logger.warning(warning)
        if self.errors:
            raise ConfigValidationError(self.errors)
        return settings


def validate_settings(environ=None) -> Dict[str, object]:
    """Validate the environment and return the settings dictionary."""
    return ConfigValidator(environ).validate_all()
