"""Simulated-annealing style search over the design space."""

from __future__ import annotations

import math
import random
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Protocol, TextIO

from .config import BASELINE, BENCHMARK_PREFIXES, FIELDS, OUTPUT_DIR
from .metrics import Metric, ResultStore
from .proposal import OBJECTIVES, generate_next_configuration
from .runner import SUMMARY_DIR, ExperimentRunner

LOG_DIR = "logs"
REPORTED_METRICS: tuple[Metric, ...] = (Metric.EDP, Metric.ED2P, Metric.EDAP, Metric.ED2AP)

_OBJECTIVE_BY_FLAG = {
    "e": Metric.ED2P,
    "p": Metric.EDP,
    "d": Metric.EDAP,
    "D": Metric.ED2AP,
}


class Runner(Protocol):
    def run(self, configuration: str, round_number: int, iteration: int) -> int: ...

    def load(self, configuration: str) -> Mapping[str, Mapping[str, float]]: ...


def _number(value: float) -> str:
    return format(value, ".6g")


def _divide(numerator: float, denominator: float) -> float:
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


class Explorer:
    """Searches for configurations minimising one objective, tracking all four."""

    def __init__(
        self,
        objective: Metric,
        runner: Runner,
        store: ResultStore,
        rng: random.Random | None = None,
    ) -> None:
        objective = Metric(objective)
        if objective not in OBJECTIVES:
            raise ValueError(f"unsupported optimisation objective: {objective!r}")
        self.objective = objective
        self.runner = runner
        self.store = store
        self.rng = rng if rng is not None else random.Random(0)
        self.seen: set[str] = set()
        self.current = BASELINE
        self.best: dict[Metric, str] = {metric: BASELINE for metric in REPORTED_METRICS}
        self.baseline_metrics: dict[Metric, float] | None = None

    def _simulate(self, configuration: str, round_number: int, iteration: int) -> None:
        self.runner.run(configuration, round_number, iteration)
        self.store.add(configuration, self.runner.load(configuration))
        self.seen.add(configuration)

    def _geomean(self, configuration: str, metric: Metric) -> float:
        return self.store.geomean(configuration, metric)

    def _summary_fields(self, configuration: str) -> list[str]:
        assert self.baseline_metrics is not None
        normalised = [
            _divide(self._geomean(configuration, metric), self.baseline_metrics[metric])
            for metric in REPORTED_METRICS
        ]
        raw = [self._geomean(configuration, metric) for metric in REPORTED_METRICS]
        return [_number(value) for value in (*normalised, *raw)]

    def run(self, log: TextIO, rounds: int = 50, iterations: int = 20) -> dict[Metric, str]:
        """Explore the design space, writing one log line per accepted step.

        Returns the best configuration found for each metric.
        """
        self._simulate(BASELINE, 0, 0)
        self.baseline_metrics = {
            metric: self._geomean(BASELINE, metric) for metric in REPORTED_METRICS
        }
        self.current = BASELINE
        self.best = {metric: BASELINE for metric in REPORTED_METRICS}
        log.write(",".join(self._summary_fields(self.current)) + "\n")
        print()

        for round_number in range(1, rounds + 1):
            threshold = 2.71 ** (-(1 + round_number / 5.0))
            iteration = 1
            while iteration <= iterations:
                chance = self.rng.random()
                proposal = generate_next_configuration(self.seen, self.objective, self.rng)
                self._simulate(proposal, round_number, iteration)
                if self.store.value(proposal, BENCHMARK_PREFIXES[0], FIELDS[0]) == 0:
                    # The simulation failed; try another point without counting it.
                    print("R", end="")
                    continue

                improved = {}
                for metric in REPORTED_METRICS:
                    proposed = self._geomean(proposal, metric)
                    improved[metric] = proposed < self._geomean(self.best[metric], metric)
                for metric, better in improved.items():
                    if better:
                        self.best[metric] = proposal

                if improved[self.objective] or chance < threshold:
                    self.current = proposal

                log.write(",".join(self._summary_fields(self.current)) + "\n")
                iteration += 1
            print()
        return dict(self.best)

    def best_report(self) -> list[str]:
        """Lines describing the best configuration for each metric."""
        if self.baseline_metrics is None:
            raise RuntimeError("the exploration has not been run")
        lines = []
        for metric in REPORTED_METRICS:
            configuration = self.best[metric]
            fields = [configuration, *self._summary_fields(configuration)]
            for benchmark in BENCHMARK_PREFIXES:
                value = self.store.metric(configuration, benchmark, metric)
                baseline = self.store.metric(BASELINE, benchmark, metric)
                fields.append(_number(value))
                fields.append(_number(_divide(value, baseline)))
            lines.append(",".join(fields) + ",\n")
        return lines


def main(argv: Sequence[str] | None = None) -> int:
    """Run an exploration for the objective named by a one-letter flag."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print(
            "Wrong number of arguments! Run as DSE e, DSE p, DSE d or DSE D",
            file=sys.stderr,
        )
        return -1
    objective = _OBJECTIVE_BY_FLAG.get(args[0][:1])
    if objective is None:
        print(
            'Invalid argument! Run as "DSE e" or "DSE p" or "DSE d" or "DSE D" for '
            "ED2P, EDP, EDAP or ED2AP optimisation runs, respectively",
            file=sys.stderr,
        )
        return -1

    for directory in (LOG_DIR, SUMMARY_DIR, OUTPUT_DIR):
        Path(directory).mkdir(parents=True, exist_ok=True)
    stem = Path(LOG_DIR) / f"min{objective.name}"
    explorer = Explorer(objective, ExperimentRunner(), ResultStore(), random.Random(0))
    with open(f"{stem}.log", "w") as log, open(f"{stem}.best", "w") as best:
        explorer.run(log)
        best.writelines(explorer.best_report())
    return 0


if __name__ == "__main__":
    sys.exit(main())