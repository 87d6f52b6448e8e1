"""
================================================================================
PRICE FETCHER - Historical USD Prices
================================================================================

Looks up the historical price of one asset in another (almost always USD)
for a given day and venue from the CryptoCompare `pricehistorical` endpoint.

Caching:
    Historical prices never change, so every successful lookup is memoized
    under the canonical key (from, to, day, venue). The cache lives in memory
    and is persisted to configs/price_cache.json (written under a file lock)
    so later runs never re-issue the same request. Failures are not cached.

Errors:
    PriceUnavailable - the service has no data for the symbol/date
    UpstreamError    - any other failure (transport, HTTP, unexpected payload)

Author: robertbiv
Last Modified: December 2025
================================================================================
"""

import json
import logging
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Dict, Optional, Tuple

import filelock
import requests

from cost_basis.decimal_utils import to_decimal
from cost_basis.processors.network_retry import NetworkRetry
from cost_basis.utils.config import PricingSettings
from cost_basis.utils.constants import (
    NO_DATA_MESSAGE_PREFIX,
    PRICE_API_EXTRA_PARAMS,
    PRICE_CACHE_FILE,
)

logger = logging.getLogger("cost_basis")

PriceKey = Tuple[str, str, str, str]


class PriceError(Exception):
    """Base class for price lookup failures"""


class PriceUnavailable(PriceError):
    """No price data exists for the symbol on that date"""


class UpstreamError(PriceError):
    """The price service failed or answered with something unexpected"""


def day_timestamp(day: str) -> int:
    """Epoch seconds of UTC midnight for a YYYY-MM-DD day"""
    d = datetime.strptime(day, '%Y-%m-%d').replace(tzinfo=timezone.utc)
    return int(d.timestamp())


class PriceFetcher:
    def __init__(self, settings: Optional[PricingSettings] = None,
                 session: Optional[requests.Session] = None,
                 cache_file: Optional[Path] = None):
        self.settings = settings or PricingSettings()
        self.session = session or requests.Session()
        self.cache_file = Path(cache_file) if cache_file else PRICE_CACHE_FILE
        self.cache: Dict[PriceKey, Decimal] = {}
        if self.settings.cache_enabled:
            self._load_cache()

    @staticmethod
    def _serialize_key(key: PriceKey) -> str:
        return json.dumps(list(key))

    def _load_cache(self):
        if not self.cache_file.exists():
            return
        try:
            with open(self.cache_file, 'r') as f:
                raw = json.load(f)
            for k, v in raw.items():
                self.cache[tuple(json.loads(k))] = to_decimal(v)
            logger.debug(f"Loaded {len(self.cache)} cached prices from {self.cache_file.name}")
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable price cache {self.cache_file}: {e}")

    def _persist(self, key: PriceKey, price: Decimal):
        if not self.settings.cache_enabled:
            return
        lock = filelock.FileLock(str(self.cache_file) + '.lock', timeout=10)
        try:
            with lock:
                data = {}
                if self.cache_file.exists():
                    with open(self.cache_file, 'r') as f:
                        data = json.load(f)
                data[self._serialize_key(key)] = str(price)
                self.cache_file.parent.mkdir(parents=True, exist_ok=True)
                with open(self.cache_file, 'w') as f:
                    json.dump(data, f, indent=4)
        except filelock.Timeout:
            logger.error(f"Failed to acquire lock for {self.cache_file}")
        except (OSError, ValueError) as e:
            logger.error(f"Failed to save price cache: {e}")

    def get_price(self, from_asset: str, to_asset: str, day: str, venue: Optional[str] = None) -> Decimal:
        """
        Historical price of one unit of `from_asset` in `to_asset` on `day` (YYYY-MM-DD).

        Raises:
            PriceUnavailable: no data for the symbol on that day
            UpstreamError: any other failure
        """
        venue = venue or self.settings.default_venue
        if self.settings.mock_prices:
            return Decimal(0)

        key = (from_asset, to_asset, day, venue)
        if key in self.cache:
            return self.cache[key]

        price = self._fetch(from_asset, to_asset, day, venue)
        self.cache[key] = price
        self._persist(key, price)
        return price

    def _fetch(self, from_asset, to_asset, day, venue) -> Decimal:
        params = {
            'fsym': from_asset,
            'tsyms': to_asset,
            'ts': day_timestamp(day),
            'e': venue,
            'extraParams': PRICE_API_EXTRA_PARAMS,
        }
        if self.settings.api_key:
            params['api_key'] = self.settings.api_key

        def request():
            resp = self.session.get(self.settings.api_url, params=params,
                                    timeout=self.settings.timeout_seconds)
            try:
                resp.raise_for_status()
            except requests.HTTPError as e:
                # Only 5xx responses are retried
                status = getattr(e.response, 'status_code', None)
                if status is not None and status < 500:
                    raise UpstreamError(f"Price request for {from_asset} on {day} rejected: {e}") from e
                raise
            return resp

        try:
            resp = NetworkRetry.run(request, retries=self.settings.retry_attempts,
                                    context=f"Price {from_asset}/{to_asset}",
                                    retry_on=(requests.RequestException,))
        except requests.RequestException as e:
            raise UpstreamError(f"Price request for {from_asset} on {day} failed: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise UpstreamError(f"Invalid price response for {from_asset} on {day}: {e}") from e

        return self._parse(data, from_asset, to_asset, day)

    @staticmethod
    def _parse(data, from_asset, to_asset, day) -> Decimal:
        if not isinstance(data, dict):
            raise UpstreamError(f"Unknown response for {from_asset} on {day}: {data!r}")

        quote = data.get(from_asset)
        if isinstance(quote, dict) and to_asset in quote:
            return to_decimal(quote[to_asset])

        message = str(data.get('Message') or '')
        if message.startswith(NO_DATA_MESSAGE_PREFIX):
            raise PriceUnavailable(f"No price for {from_asset} on {day}")
        if data.get('Response') == 'Error':
            raise UpstreamError(message or f"Price service error for {from_asset} on {day}")
        raise UpstreamError(f"Unknown response for {from_asset} on {day}: {data!r}")
