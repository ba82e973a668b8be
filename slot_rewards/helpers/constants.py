"""Common configuration constants used across the application."""

# Batch Size Constants
RECEIPT_BATCH_SIZE = 10
"""Number of receipt lookups allowed in flight at once during fee aggregation"""

# HTTP and Network Constants
DEFAULT_TIMEOUT = 30.0
"""Default HTTP request timeout in seconds"""

RPC_CALL_TIMEOUT = 5.0
"""Deadline for a single execution-layer JSON-RPC call in seconds"""

DEFAULT_BEACON_ENDPOINT = "https://ethereum-beacon-api.publicnode.com"
"""Consensus-layer REST endpoint used when BEACON_ENDPOINT is not set"""

# HTTP Connection Pooling
MAX_KEEPALIVE_CONNECTIONS = 5
"""Maximum number of keepalive connections in pool"""

MAX_CONNECTIONS = 20
"""Maximum total number of connections"""

# Units
WEI_PER_GWEI = 10**9
"""Number of wei in one Gwei"""

WEI_PER_ETH = 10**18
"""Number of wei in one ETH"""


__all__ = [
    "DEFAULT_BEACON_ENDPOINT",
    "DEFAULT_TIMEOUT",
    "MAX_CONNECTIONS",
    "MAX_KEEPALIVE_CONNECTIONS",
    "RECEIPT_BATCH_SIZE",
    "RPC_CALL_TIMEOUT",
    "WEI_PER_ETH",
    "WEI_PER_GWEI",
]
