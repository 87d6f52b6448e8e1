"""Input/output processors around the engine: CSV ingestion and price lookups."""

from cost_basis.processors.ingestor import IngestError, parse_transactions, read_transactions, to_csv
from cost_basis.processors.network_retry import NetworkRetry
from cost_basis.processors.price_fetcher import PriceError, PriceFetcher, PriceUnavailable, UpstreamError

__all__ = [
    "IngestError",
    "parse_transactions",
    "read_transactions",
    "to_csv",
    "NetworkRetry",
    "PriceError",
    "PriceFetcher",
    "PriceUnavailable",
    "UpstreamError",
]
