"""Design-space configuration strings: constants, parsing and formatting.

A configuration is 18 single-digit indices separated by single spaces,
one index per design dimension.
"""

from __future__ import annotations

from collections.abc import Iterable

OUTPUT_DIR = "rawProjectOutputData/"
WORKER_SCRIPT = "worker.sh"
BASELINE = "0 0 0 0 0 0 5 0 5 0 2 2 2 3 0 0 3 0"

DIMENSION_NAMES: tuple[str, ...] = (
    "width",
    "fetchspeed",
    "scheduling",
    "RUUsize",
    "LSQsize",
    "Memports",
    "dl1sets",
    "dl1assoc",
    "il1sets",
    "il1assoc",
    "ul2sets",
    "ul2blocksize",
    "ul2assoc",
    "tlbsets",
    "dl1lat",
    "il1lat",
    "ul2lat",
    "bpred",
)

DIMENSION_CARDINALITY: tuple[int, ...] = (
    4, 2, 2, 6, 4, 2, 9, 3, 9, 3, 10, 4, 5, 5, 7, 7, 9, 6,
)

FIELDS: tuple[str, ...] = (
    "sim_num_insn",
    "sim_cycle",
    "il1.accesses",
    "dl1.accesses",
    "ul2.accesses",
    "ul2.misses",
    "ul2.writebacks",
)

BENCHMARK_PREFIXES: tuple[str, ...] = ("0.", "1.", "2.", "3.", "4.")

DIMENSIONS = len(DIMENSION_CARDINALITY)
CONFIGURATION_LENGTH = 2 * DIMENSIONS - 1


class ConfigurationError(ValueError):
    """Raised when a configuration string or value list is malformed."""


def _format_problem(configuration: str) -> str | None:
    """Describe what is wrong with a configuration string, or return None."""
    if not isinstance(configuration, str):
        return "configuration must be a string"
    if len(configuration) != CONFIGURATION_LENGTH:
        return "wrong length for configuration"
    for index, cardinality in enumerate(DIMENSION_CARDINALITY):
        position = 2 * index
        field = configuration[position]
        if field not in "0123456789":
            return f"field not a digit: {index}"
        value = int(field)
        if value >= cardinality:
            return f"field out of range: {index} {value}"
        if index != DIMENSIONS - 1 and configuration[position + 1] != " ":
            return f"odd characters not spaces for field: {index}"
    return None


def is_valid_format(configuration: str) -> bool:
    """Return True if the string encodes 18 in-range dimension indices."""
    return _format_problem(configuration) is None


def parse_configuration(configuration: str) -> tuple[int, ...]:
    """Split a configuration string into its 18 integer indices."""
    problem = _format_problem(configuration)
    if problem is not None:
        raise ConfigurationError(f"{problem}: {configuration!r}")
    return tuple(int(field) for field in configuration.split(" "))


def format_configuration(values: Iterable[int]) -> str:
    """Pack 18 dimension indices into a configuration string."""
    values = list(values)
    if len(values) != DIMENSIONS:
        raise ConfigurationError(
            f"expected {DIMENSIONS} values, got {len(values)}"
        )
    return " ".join(str(int(value)) for value in values)


def to_filename(configuration: str) -> str:
    """Return the dotted form of a configuration used in file names."""
    return configuration.replace(" ", ".")