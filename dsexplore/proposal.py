"""Proposing new design points to simulate."""

from __future__ import annotations

import random
from collections.abc import Container

from .config import BASELINE, DIMENSION_CARDINALITY, format_configuration
from .metrics import Metric
from .validation import validate_configuration

# Each objective fixes the core dimensions (width, fetch speed, scheduling,
# RUU size, LSQ size, memory ports) and the branch predictor; the cache
# dimensions in between are chosen at random.
_CORE_SETTINGS: dict[Metric, tuple[tuple[int, ...], int]] = {
    # Widest out-of-order core with a perfect predictor.
    Metric.ED2P: ((3, 1, 1, 5, 3, 1), 0),
    # Narrowest in-order core with a perfect predictor.
    Metric.EDP: ((0, 0, 0, 0, 0, 0), 0),
    # Narrowest in-order core with a bimodal predictor.
    Metric.EDAP: ((0, 0, 0, 0, 0, 0), 2),
    # Moderately wide out-of-order core with a combined predictor.
    Metric.ED2AP: ((2, 1, 1, 4, 2, 1), 5),
}

OBJECTIVES: tuple[Metric, ...] = tuple(_CORE_SETTINGS)

_RANDOM_DIMENSIONS = range(6, 17)


def _core_settings(objective: Metric) -> tuple[tuple[int, ...], int]:
    try:
        return _CORE_SETTINGS[Metric(objective)]
    except (KeyError, ValueError):
        raise ValueError(f"unsupported optimisation objective: {objective!r}") from None


def propose_configuration(objective: Metric, rng: random.Random) -> str:
    """Propose a well-formed configuration suited to the objective.

    The proposal is not checked against the design constraints.
    """
    core, predictor = _core_settings(objective)
    caches = [rng.randrange(DIMENSION_CARDINALITY[dim]) for dim in _RANDOM_DIMENSIONS]
    return format_configuration([*core, *caches, predictor])


def generate_next_configuration(
    seen: Container[str], objective: Metric, rng: random.Random
) -> str:
    """Return a valid configuration that is not in ``seen``.

    The baseline is returned first if it has not been seen yet.
    """
    _core_settings(objective)
    candidate = BASELINE
    while candidate in seen:
        candidate = propose_configuration(objective, rng)
        while not validate_configuration(candidate):
            candidate = propose_configuration(objective, rng)
    return candidate