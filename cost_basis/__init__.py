"""
================================================================================
COST_BASIS PACKAGE - Crypto Cost Basis Engine
================================================================================

Top-level package containing all application modules organized by function.

Package Structure:
    cost_basis/core/        - Classification engine and FIFO lot ledger
    cost_basis/processors/  - CSV ingestion, price lookups, network retry
    cost_basis/utils/       - Shared utilities (logging, config, constants)

Design Principles:
    - Separation of concerns
    - Engine has no I/O of its own (prices arrive through an injected fetcher)
    - Test-friendly architecture

Author: robertbiv
Last Modified: December 2025
================================================================================
"""

__version__ = "2025.1"
__author__ = "robertbiv"
