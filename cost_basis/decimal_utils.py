from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext
from typing import Any


# ============================================================================
# PRECISION CONSTANTS
# ============================================================================

# USD/fiat precision (cents)
USD_PRECISION = Decimal('0.01')

# Exports write an empty amount as a dash
EMPTY_AMOUNT = '-'


# ============================================================================
# ROUNDING CONTEXT (ROUND_HALF_UP)
# ============================================================================

def set_rounding_context() -> None:
    """
    Set global Decimal context for cost basis calculations.
    Uses ROUND_HALF_UP (0.5 always rounds up).
    Call this once at application startup.
    """
    ctx = getcontext()
    ctx.rounding = ROUND_HALF_UP
    ctx.prec = 28  # Support up to 28 significant digits


# Initialize rounding on module load
set_rounding_context()


# ============================================================================
# DECIMAL COERCION HELPERS
# ============================================================================

def to_decimal(value: Any, default: Decimal = Decimal(0)) -> Decimal:
    """
    Safely coerce any value to a Decimal, preserving precision for cost basis math.

    Export cells use '-' (or nothing at all) for "no amount"; both become the
    default, as do None, NaN and invalid strings.

    Args:
        value: Any value to convert. Supports int, float, str, Decimal, None.
        default: Decimal fallback if conversion fails. Defaults to Decimal(0).

    Returns:
        Decimal: Precise numeric value, or default if conversion fails.

    Examples:
        >>> to_decimal('45000.123')
        Decimal('45000.123')
        >>> to_decimal('-') == Decimal(0)
        True
        >>> to_decimal('') == Decimal(0)
        True
        >>> to_decimal(None, Decimal('-1')) == Decimal('-1')
        True
    """
    if value is None:
        return default
    if isinstance(value, Decimal):
        return default if not value.is_finite() else value
    if isinstance(value, str):
        value = value.strip()
        if value in ('', EMPTY_AMOUNT):
            return default
    try:
        result = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return default
    if not result.is_finite():
        return default
    return result


def is_blank_amount(value: Any) -> bool:
    """True when an export cell carries no amount ('', '-', None or zero)"""
    return to_decimal(value) == 0


def round_usd(value: Any) -> Decimal:
    """Round a USD figure to cents"""
    return to_decimal(value).quantize(USD_PRECISION, rounding=ROUND_HALF_UP)
