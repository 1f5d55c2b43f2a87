"""Cost model: cycle time, energy, cache sizes, area and combined products."""

from __future__ import annotations

import math
from collections.abc import Mapping
from enum import Enum
from functools import lru_cache

from .config import BENCHMARK_PREFIXES, FIELDS, parse_configuration

MEMORY_REFRESH_WATTS = 512e-3
MEMORY_ACCESS_JOULES = 2e-9
OUT_OF_RANGE_COST = float(0xBAD)
PERFECT_PREDICTOR_AREA = 1234567890.0

# Keyed by (in-order, issue width).
_CYCLE_TIME = {
    (True, 1): 100e-12, (True, 2): 120e-12, (True, 4): 140e-12, (True, 8): 165e-12,
    (False, 1): 115e-12, (False, 2): 125e-12, (False, 4): 150e-12, (False, 8): 175e-12,
}
_ENERGY_PER_INSTRUCTION = {
    (True, 1): 8e-12, (True, 2): 10e-12, (True, 4): 14e-12, (True, 8): 20e-12,
    (False, 1): 10e-12, (False, 2): 12e-12, (False, 4): 18e-12, (False, 8): 27e-12,
}
_PIPELINE_LEAKAGE = {
    (True, 1): 1e-3, (True, 2): 1.5e-3, (True, 4): 7e-3, (True, 8): 30e-3,
    (False, 1): 1.5e-3, (False, 2): 2e-3, (False, 4): 8e-3, (False, 8): 32e-3,
}

# (upper size bound in bytes, leakage in watts, energy per access in joules)
_CACHE_TABLE = (
    (8192, 125e-6, 20e-12),
    (16384, 250e-6, 28e-12),
    (32768, 500e-6, 40e-12),
    (65536, 1e-3, 56e-12),
    (131072, 2e-3, 80e-12),
    (262144, 4e-3, 112e-12),
    (524288, 8e-3, 160e-12),
    (1048576, 16e-3, 224e-12),
    (2097152, 32e-3, 360e-12),
)

_PREDICTOR_AREA = {
    0: PERFECT_PREDICTOR_AREA,  # perfect
    1: 0.0,  # not taken
    2: 0.25,  # bimodal
    3: 0.5,  # two-level, first variant
    4: 0.5,  # two-level, second variant
    5: 0.75,  # combined
}


class Metric(Enum):
    """Quantities that can be computed per benchmark and averaged."""

    EXECUTION_TIME = "time"
    AREA = "area"
    EDP = "edp"
    ED2P = "ed2p"
    EDAP = "edap"
    ED2AP = "ed2ap"


@lru_cache(maxsize=4096)
def _dims(configuration: str) -> tuple[int, ...]:
    return parse_configuration(configuration)


def _core_key(configuration: str) -> tuple[bool, int]:
    dims = _dims(configuration)
    return dims[2] == 0, 1 << dims[0]


def cycle_time(configuration: str) -> float:
    """Clock period in seconds."""
    return _CYCLE_TIME[_core_key(configuration)]


def energy_per_instruction(configuration: str) -> float:
    """Energy per committed instruction in joules."""
    return _ENERGY_PER_INSTRUCTION[_core_key(configuration)]


def pipeline_leakage(configuration: str) -> float:
    """Pipeline leakage power in watts."""
    return _PIPELINE_LEAKAGE[_core_key(configuration)]


def cache_leakage_for_size(size: int) -> float:
    """Leakage power in watts of a cache of the given size in bytes."""
    for bound, leakage, _ in _CACHE_TABLE:
        if size <= bound:
            return leakage
    return OUT_OF_RANGE_COST


def access_energy(size: int) -> float:
    """Energy in joules of one access to a cache of the given size in bytes."""
    for bound, _, energy in _CACHE_TABLE:
        if size <= bound:
            return energy
    return OUT_OF_RANGE_COST


def _l1_block_size(dims: tuple[int, ...]) -> int:
    return 8 * (1 << dims[0])


def dl1_size(configuration: str) -> int:
    """L1 data cache size in bytes."""
    dims = _dims(configuration)
    return (1 << dims[7]) * (32 << dims[6]) * _l1_block_size(dims)


def il1_size(configuration: str) -> int:
    """L1 instruction cache size in bytes."""
    dims = _dims(configuration)
    return (1 << dims[9]) * (32 << dims[8]) * _l1_block_size(dims)


def l2_size(configuration: str) -> int:
    """Unified L2 cache size in bytes."""
    dims = _dims(configuration)
    return (1 << dims[12]) * (256 << dims[10]) * (16 << dims[11])


def cache_leakage(configuration: str) -> float:
    """Total leakage power of all three caches in watts."""
    return sum(
        cache_leakage_for_size(size)
        for size in (dl1_size(configuration), il1_size(configuration), l2_size(configuration))
    )


def area(configuration: str) -> float:
    """Estimated chip area in square millimetres."""
    dims = _dims(configuration)
    width = 1 << dims[0]
    if dims[2] == 1:
        total = float(4 + width * width // 3)
    else:
        total = float(width * width // 2)
    total += il1_size(configuration) // 32769
    total += dl1_size(configuration) // 32769
    total += l2_size(configuration) // 32769
    lsq_size = (1 << dims[4]) * 4
    total += (lsq_size / 2.0) * (lsq_size / 2.0) / 128
    ruu_size = (1 << dims[3]) * 4
    total += (ruu_size / 4.0) * (ruu_size / 4.0) / 128
    total += _PREDICTOR_AREA.get(dims[17], 0.0)
    return total


class ResultStore:
    """Simulation counters per configuration and benchmark, with derived metrics."""

    def __init__(self) -> None:
        self._results: dict[str, dict[str, dict[str, float]]] = {}

    def add(self, configuration: str, values: Mapping[str, Mapping[str, float]]) -> None:
        """Record counters, keyed by benchmark prefix and then field name."""
        self._results[configuration] = {
            benchmark: {field: float(value) for field, value in fields.items()}
            for benchmark, fields in values.items()
        }

    def __contains__(self, configuration: object) -> bool:
        return configuration in self._results

    def value(self, configuration: str, benchmark: str, field: str) -> float:
        """One counter; counters never recorded read as zero."""
        if configuration not in self._results:
            raise KeyError(f"no results for configuration {configuration!r}")
        return self._results[configuration].get(benchmark, {}).get(field, 0.0)

    def execution_time(self, configuration: str, benchmark: str) -> float:
        """Run time in seconds of one benchmark."""
        return cycle_time(configuration) * self.value(configuration, benchmark, FIELDS[1])

    def edp(self, configuration: str, benchmark: str) -> float:
        """Energy-delay product in joule-seconds."""
        count = {field: self.value(configuration, benchmark, field) for field in FIELDS}
        time = self.execution_time(configuration, benchmark)
        leakage_energy = time * (
            pipeline_leakage(configuration)
            + cache_leakage(configuration)
            + MEMORY_REFRESH_WATTS
        )
        dynamic_energy = (
            energy_per_instruction(configuration) * count["sim_num_insn"]
            + access_energy(il1_size(configuration)) * count["il1.accesses"]
            + access_energy(dl1_size(configuration)) * count["dl1.accesses"]
            + access_energy(l2_size(configuration)) * count["ul2.accesses"]
            + MEMORY_ACCESS_JOULES * (count["ul2.misses"] + count["ul2.writebacks"])
        )
        return time * (leakage_energy + dynamic_energy)

    def ed2p(self, configuration: str, benchmark: str) -> float:
        """Energy-delay-squared product."""
        return self.edp(configuration, benchmark) * self.execution_time(configuration, benchmark)

    def edap(self, configuration: str, benchmark: str) -> float:
        """Energy-delay-area product."""
        return self.edp(configuration, benchmark) * area(configuration)

    def ed2ap(self, configuration: str, benchmark: str) -> float:
        """Energy-delay-squared-area product."""
        return (
            self.edp(configuration, benchmark)
            * self.execution_time(configuration, benchmark)
            * area(configuration)
        )

    def metric(self, configuration: str, benchmark: str, metric: Metric) -> float:
        """Compute the given metric for one benchmark."""
        if metric is Metric.AREA:
            return area(configuration)
        compute = {
            Metric.EXECUTION_TIME: self.execution_time,
            Metric.EDP: self.edp,
            Metric.ED2P: self.ed2p,
            Metric.EDAP: self.edap,
            Metric.ED2AP: self.ed2ap,
        }[Metric(metric)]
        return compute(configuration, benchmark)

    def geomean(self, configuration: str, metric: Metric) -> float:
        """Geometric mean of a metric over all benchmarks."""
        product = math.prod(
            self.metric(configuration, benchmark, metric) for benchmark in BENCHMARK_PREFIXES
        )
        return math.pow(product, 1.0 / len(BENCHMARK_PREFIXES))