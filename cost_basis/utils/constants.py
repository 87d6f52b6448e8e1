"""
================================================================================
CONSTANTS - System-Wide Configuration Values
================================================================================

Centralized repository for hardcoded constants used throughout the
cost basis engine. Organized by functional category.

Constant Categories:
    1. File Paths - Directory and file locations
    2. Classification - Category names, like-kind cutoff, match tolerance
    3. Pricing - Price API defaults
    4. Airdrops - Historical list of zero-basis airdrop symbols

Key Constants:

    LIKE_KIND_CUTOFF_YEAR = 2018
        Crypto-to-crypto trades dated before this year defer gain
        (substituted basis) instead of realizing it.

    MATCH_TOLERANCE = 0.02
        Maximum amount difference for a deposit to reconcile with a
        same-day withdrawal.

Note:
    Values in this file are STATIC. For runtime-configurable settings,
    use config.json via cost_basis.utils.config.

Author: robertbiv
Last Modified: December 2025
================================================================================
"""

from pathlib import Path
from decimal import Decimal

# ==========================================
# FILE PATHS
# ==========================================
BASE_DIR = Path.cwd()
OUTPUT_DIR = BASE_DIR / 'outputs'
LOG_DIR = OUTPUT_DIR / 'logs'
CONFIG_FILE = BASE_DIR / 'configs' / 'config.json'
PRICE_CACHE_FILE = BASE_DIR / 'configs' / 'price_cache.json'

# ==========================================
# TRANSACTION TYPES
# ==========================================
TYPE_TRADE = 'Trade'
TYPE_DEPOSIT = 'Deposit'
TYPE_WITHDRAWAL = 'Withdrawal'
TYPE_INCOME = 'Income'
TYPE_LOST = 'Lost'
TYPE_SPEND = 'Spend'

USD = 'USD'
TETHER = 'USDT'

# ==========================================
# CATEGORY BUCKETS
# ==========================================
# Order matches the summary report
CATEGORY_WITHDRAWAL = 'Withdrawal'
CATEGORY_MATCHED_DEPOSIT = 'MatchedDeposit'
CATEGORY_UNMATCHED_DEPOSIT = 'UnmatchedDeposit'
CATEGORY_USD_BUY = 'UsdBuy'
CATEGORY_USD_DEPOSIT = 'UsdDeposit'
CATEGORY_AIRDROP = 'Airdrop'
CATEGORY_INCOME = 'Income'
CATEGORY_TRADE = 'Trade'
CATEGORY_MARGIN = 'Margin'
CATEGORY_LENDING = 'Lending'
CATEGORY_LOST = 'Lost'
CATEGORY_SPEND = 'Spend'

CATEGORIES = (
    CATEGORY_WITHDRAWAL,
    CATEGORY_MATCHED_DEPOSIT,
    CATEGORY_UNMATCHED_DEPOSIT,
    CATEGORY_USD_BUY,
    CATEGORY_USD_DEPOSIT,
    CATEGORY_AIRDROP,
    CATEGORY_INCOME,
    CATEGORY_TRADE,
    CATEGORY_MARGIN,
    CATEGORY_LENDING,
    CATEGORY_LOST,
    CATEGORY_SPEND,
)

CATEGORY_LABELS = {
    CATEGORY_WITHDRAWAL: 'Withdrawals',
    CATEGORY_MATCHED_DEPOSIT: 'Matched Deposits',
    CATEGORY_UNMATCHED_DEPOSIT: 'Unmatched Deposits',
    CATEGORY_USD_BUY: 'USD Buys',
    CATEGORY_USD_DEPOSIT: 'USD Deposits',
    CATEGORY_AIRDROP: 'Airdrops',
    CATEGORY_INCOME: 'Income',
    CATEGORY_TRADE: 'Trades',
    CATEGORY_MARGIN: 'Margin Trades',
    CATEGORY_LENDING: 'Lending',
    CATEGORY_LOST: 'Lost',
    CATEGORY_SPEND: 'Spend',
}

# ==========================================
# CLASSIFICATION CONSTANTS
# ==========================================
LIKE_KIND_CUTOFF_YEAR = 2018  # Trades before this year defer gain
MATCH_TOLERANCE = Decimal('0.02')  # Deposit/withdrawal reconciliation margin
USD_SALE_EXCHANGE = 'Coinbase'  # Shift card spends show up as Coinbase withdrawals
USD_SALE_MAX_AMOUNT = Decimal('4')  # Withdrawals below this are card spends, not transfers
COST_BASIS_COMMENT = 'Cost Basis'
TRADE_DATE_FORMAT = '%d.%m.%Y'

# ==========================================
# PRICING CONSTANTS
# ==========================================
DEFAULT_VENUE = 'cccagg'  # CryptoCompare aggregate
USD_SALE_VENUE = 'coinbase'
PRICE_API_URL = 'https://min-api.cryptocompare.com/data/pricehistorical'
PRICE_API_EXTRA_PARAMS = 'cost-basis-filler'
API_TIMEOUT_SECONDS = 10
API_RETRY_MAX_ATTEMPTS = 3
NO_DATA_MESSAGE_PREFIX = 'There is no data for the symbol'

# ==========================================
# AIRDROPS
# ==========================================
# Deposits of these symbols are assigned a cost basis of zero
DEFAULT_AIRDROP_SYMBOLS = (
    'AIMS', 'AMM', 'ARCONA', 'BEAUTY', 'blockwel', 'BNB', 'BOBx', 'BULLEON',
    'CAN', 'CANDY', 'CAT', 'CGW', 'CLN', 'cryptics', 'DATA', 'ELEC', 'ERC20',
    'EMO', 'ETP', 'FIFA.win', 'FIFAmini', 'FREE', 'Googol', 'HEALP', 'HKY',
    'HMC', 'HSC', 'HuobiAir', 'HUR', 'IBA', 'INSP', 'JOT', 'LPT', 'OCEAN',
    'OCN', 'Only', 'PCBC', 'PMOD', 'R', 'safe.ad', 'SCB', 'SNGX', 'SSS', 'SW',
    'TOPB', 'TOPBTC', 'TRX', 'UBT', 'VENT', 'VIN', 'VIU', 'VKT', 'VOS.AI',
    'WIN', 'WLM', 'WOLK', 'XNN', 'ZNT',
)

# ==========================================
# CSV LAYOUT
# ==========================================
CURRENCY_HEADER = 'Cur.'
CURRENCY_COLUMNS = ('CurBuy', 'CurSell', 'CurFee')
EXPORT_FIELDS = ['Type', 'Buy', 'CurBuy', 'Sell', 'CurSell', 'Exchange',
                 'Trade Group', 'Comment', 'Trade Date']
