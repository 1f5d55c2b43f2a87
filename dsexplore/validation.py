"""Checks that a configuration satisfies the simulator's design constraints."""

from __future__ import annotations

from .config import is_valid_format, parse_configuration

WIDTHS = (1, 2, 4, 8)
L1_SETS = (32, 64, 128, 256, 512, 1024, 2048, 4096, 8192)
L1_WAYS = (1, 2, 4)
UL2_SETS = (256, 512, 1024, 2048, 4096, 8192, 16384, 32768, 65536, 131072)
UL2_BLOCK_SIZES = (16, 32, 64, 128)
UL2_WAYS = (1, 2, 4, 8, 16)
L1_LATENCIES = (1, 2, 3, 4, 5, 6, 7)
UL2_LATENCIES = (5, 6, 7, 8, 9, 10, 11, 12, 13)

_L1_BASE_LATENCY = {8: 1, 16: 2, 32: 3, 64: 4}
_L1_WAY_PENALTY = {1: 0, 2: 1, 4: 2}
_UL2_BASE_LATENCY = {128: 7, 256: 8, 512: 9, 1024: 10, 2048: 11}
_UL2_WAY_ADJUST = {1: -2, 2: -1, 4: 0, 8: 1, 16: 2}


def l1_latency(size_kb: int, ways: int) -> int | None:
    """Required L1 hit latency in cycles, or None for an unsupported shape."""
    base = _L1_BASE_LATENCY.get(size_kb)
    penalty = _L1_WAY_PENALTY.get(ways)
    if base is None or penalty is None:
        return None
    return base + penalty


def ul2_latency(size_kb: int, ways: int) -> int | None:
    """Required unified L2 hit latency in cycles, or None if unsupported."""
    base = _UL2_BASE_LATENCY.get(size_kb)
    adjust = _UL2_WAY_ADJUST.get(ways)
    if base is None or adjust is None:
        return None
    return base + adjust


def validate_configuration(configuration: str) -> bool:
    """Return True if the configuration is well formed and meets all constraints."""
    if not is_valid_format(configuration):
        return False
    dims = parse_configuration(configuration)

    width = WIDTHS[dims[0]]
    dl1_sets = L1_SETS[dims[6]]
    dl1_ways = L1_WAYS[dims[7]]
    il1_sets = L1_SETS[dims[8]]
    il1_ways = L1_WAYS[dims[9]]
    ul2_sets = UL2_SETS[dims[10]]
    ul2_block = UL2_BLOCK_SIZES[dims[11]]
    ul2_ways = UL2_WAYS[dims[12]]
    dl1_lat = L1_LATENCIES[dims[14]]
    il1_lat = L1_LATENCIES[dims[15]]
    ul2_lat = UL2_LATENCIES[dims[16]]

    # L1 block size matches the fetch queue, which is eight bytes per lane.
    l1_block = width * 8
    il1_size = il1_sets * il1_ways * l1_block
    dl1_size = dl1_sets * dl1_ways * l1_block
    ul2_size = ul2_sets * ul2_ways * ul2_block

    valid = True
    if ul2_block < 2 * l1_block or ul2_block > 128:
        valid = False
    if ul2_size < il1_size + dl1_size:
        valid = False
    if il1_lat != l1_latency(il1_size // 1024, il1_ways):
        valid = False
    if dl1_lat != l1_latency(dl1_size // 1024, dl1_ways):
        valid = False
    if ul2_lat != ul2_latency(ul2_size // 1024, ul2_ways):
        valid = False
    return valid