"""Protocol-era constants for execution-layer block rewards."""

from slot_rewards.helpers.constants import WEI_PER_ETH

BYZANTIUM_BLOCK = 4_370_000
"""First block of the Byzantium upgrade (EIP-649: subsidy 5 -> 3 ETH)"""

CONSTANTINOPLE_BLOCK = 7_280_000
"""First block of the Constantinople upgrade (EIP-1234: subsidy 3 -> 2 ETH)"""

MERGE_BLOCK = 15_537_392
"""Last block still carrying a proof-of-work subsidy"""

FRONTIER_SUBSIDY = 5 * WEI_PER_ETH
BYZANTIUM_SUBSIDY = 3 * WEI_PER_ETH
CONSTANTINOPLE_SUBSIDY = 2 * WEI_PER_ETH


__all__ = [
    "BYZANTIUM_BLOCK",
    "BYZANTIUM_SUBSIDY",
    "CONSTANTINOPLE_BLOCK",
    "CONSTANTINOPLE_SUBSIDY",
    "FRONTIER_SUBSIDY",
    "MERGE_BLOCK",
]
