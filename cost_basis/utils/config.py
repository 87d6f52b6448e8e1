"""
Configuration Management Module

Handles loading and validating application configuration from config.json.
User values are merged over defaults so new options always have a value.
"""

import os
import json
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import FrozenSet, Optional

from . import constants

logger = logging.getLogger("cost_basis")

API_KEY_ENV_VAR = 'CRYPTOCOMPARE_API_KEY'


def default_config() -> dict:
    """Return a fresh copy of the default configuration"""
    return {
        "pricing": {
            "default_venue": constants.DEFAULT_VENUE,
            "usd_sale_venue": constants.USD_SALE_VENUE,
            "api_url": constants.PRICE_API_URL,
            "api_key": "",
            "timeout_seconds": constants.API_TIMEOUT_SECONDS,
            "retry_attempts": constants.API_RETRY_MAX_ATTEMPTS,
            "cache_enabled": True,
            "mock_prices": False,
        },
        "classification": {
            "airdrop_symbols": list(constants.DEFAULT_AIRDROP_SYMBOLS),
            "like_kind_cutoff_year": constants.LIKE_KIND_CUTOFF_YEAR,
            "match_tolerance": str(constants.MATCH_TOLERANCE),
            "usd_sale_max_amount": str(constants.USD_SALE_MAX_AMOUNT),
            "usd_sale_exchange": constants.USD_SALE_EXCHANGE,
        },
    }


def load_config(config_file: Optional[Path] = None) -> dict:
    """
    Load configuration from config.json with sensible defaults

    Args:
        config_file: Override for the config location (defaults to CONFIG_FILE)

    Returns:
        dict: Configuration dictionary
    """
    config_file = Path(config_file) if config_file else constants.CONFIG_FILE
    defaults = default_config()

    if not config_file.exists():
        _save_config(config_file, defaults)
        return defaults

    try:
        with open(config_file, 'r') as f:
            config = json.load(f)

        # Merge with defaults to ensure all keys exist
        merged = _deep_merge(defaults, config)

        # Save merged config back if anything was added
        if merged != config:
            _save_config(config_file, merged)

        return merged
    except json.JSONDecodeError as e:
        logger.error(f"Config file corrupted: {e}. Using defaults.")
        return defaults
    except OSError as e:
        logger.error(f"Error loading config: {e}. Using defaults.")
        return defaults


def _deep_merge(defaults: dict, override: dict) -> dict:
    """
    Deep merge override config into defaults, preserving new defaults

    Args:
        defaults: Default configuration
        override: User-provided configuration

    Returns:
        dict: Merged configuration
    """
    result = defaults.copy()
    for key, value in override.items():
        if key in defaults and isinstance(defaults[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(defaults[key], value)
        else:
            result[key] = value
    return result


def _save_config(config_file: Path, config: dict):
    """
    Save configuration to file

    Args:
        config_file: Path to config file
        config: Configuration dictionary
    """
    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(config_file, 'w') as f:
            json.dump(config, f, indent=4)
    except OSError as e:
        logger.error(f"Failed to save config: {e}")


@dataclass(frozen=True)
class PricingSettings:
    default_venue: str = constants.DEFAULT_VENUE
    usd_sale_venue: str = constants.USD_SALE_VENUE
    api_url: str = constants.PRICE_API_URL
    api_key: str = ""
    timeout_seconds: float = constants.API_TIMEOUT_SECONDS
    retry_attempts: int = constants.API_RETRY_MAX_ATTEMPTS
    cache_enabled: bool = True
    mock_prices: bool = False

    @classmethod
    def from_config(cls, config: dict) -> 'PricingSettings':
        section = config.get('pricing', {})
        return cls(
            default_venue=section.get('default_venue', constants.DEFAULT_VENUE),
            usd_sale_venue=section.get('usd_sale_venue', constants.USD_SALE_VENUE),
            api_url=section.get('api_url', constants.PRICE_API_URL),
            api_key=section.get('api_key') or os.environ.get(API_KEY_ENV_VAR, ''),
            timeout_seconds=float(section.get('timeout_seconds', constants.API_TIMEOUT_SECONDS)),
            retry_attempts=int(section.get('retry_attempts', constants.API_RETRY_MAX_ATTEMPTS)),
            cache_enabled=bool(section.get('cache_enabled', True)),
            mock_prices=bool(section.get('mock_prices', False)),
        )


@dataclass(frozen=True)
class EngineSettings:
    """Options the classifier reads; airdrop symbols are injected rather than global"""
    airdrop_symbols: FrozenSet[str] = field(
        default_factory=lambda: frozenset(constants.DEFAULT_AIRDROP_SYMBOLS))
    default_venue: str = constants.DEFAULT_VENUE
    usd_sale_venue: str = constants.USD_SALE_VENUE
    like_kind_cutoff_year: int = constants.LIKE_KIND_CUTOFF_YEAR
    match_tolerance: Decimal = constants.MATCH_TOLERANCE
    usd_sale_max_amount: Decimal = constants.USD_SALE_MAX_AMOUNT
    usd_sale_exchange: str = constants.USD_SALE_EXCHANGE

    @classmethod
    def from_config(cls, config: dict) -> 'EngineSettings':
        pricing = config.get('pricing', {})
        section = config.get('classification', {})
        return cls(
            airdrop_symbols=frozenset(section.get('airdrop_symbols', constants.DEFAULT_AIRDROP_SYMBOLS)),
            default_venue=pricing.get('default_venue', constants.DEFAULT_VENUE),
            usd_sale_venue=pricing.get('usd_sale_venue', constants.USD_SALE_VENUE),
            like_kind_cutoff_year=int(section.get('like_kind_cutoff_year', constants.LIKE_KIND_CUTOFF_YEAR)),
            match_tolerance=Decimal(str(section.get('match_tolerance', constants.MATCH_TOLERANCE))),
            usd_sale_max_amount=Decimal(str(section.get('usd_sale_max_amount', constants.USD_SALE_MAX_AMOUNT))),
            usd_sale_exchange=section.get('usd_sale_exchange', constants.USD_SALE_EXCHANGE),
        )
