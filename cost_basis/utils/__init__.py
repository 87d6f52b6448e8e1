"""
================================================================================
UTILS MODULE - Shared Utilities and Helpers
================================================================================

Shared infrastructure used across all application components.

Exported Functions:
    Logging:
        - set_run_context(context) - Set execution context
        - logger - Main application logger

    Configuration:
        - load_config() - Load configuration from config.json
        - EngineSettings - Typed classifier options
        - PricingSettings - Typed price lookup options

Usage:
    from cost_basis.utils import logger, load_config
    from cost_basis.utils.constants import LIKE_KIND_CUTOFF_YEAR

Author: robertbiv
Last Modified: December 2025
================================================================================
"""

from .logger import set_run_context, logger
from .config import load_config, EngineSettings, PricingSettings

__all__ = [
    'set_run_context',
    'logger',
    'load_config',
    'EngineSettings',
    'PricingSettings',
]
