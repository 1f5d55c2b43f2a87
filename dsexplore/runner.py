"""Running the simulation script and collecting its statistics."""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

from .config import (
    BENCHMARK_PREFIXES,
    FIELDS,
    OUTPUT_DIR,
    WORKER_SCRIPT,
    ConfigurationError,
    is_valid_format,
    to_filename,
)

SUMMARY_DIR = "summaryfiles"


def parse_simout(text: str) -> dict[str, float]:
    """Extract the tracked statistics from simulator output.

    A statistic is a line whose first word is the field name; its value is
    the second word. Fields that do not appear read as zero.
    """
    found: dict[str, float] = {}
    for line in text.splitlines():
        words = line.split()
        if len(words) < 2 or words[0] not in FIELDS or words[0] in found:
            continue
        try:
            found[words[0]] = float(words[1])
        except ValueError:
            continue
    return {field: found.get(field, 0.0) for field in FIELDS}


class ExperimentRunner:
    """Launches the simulation script and reads back its results."""

    def __init__(
        self,
        output_dir: str | Path = OUTPUT_DIR,
        summary_dir: str | Path = SUMMARY_DIR,
        script: str | Sequence[str] = WORKER_SCRIPT,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.summary_dir = Path(summary_dir)
        self.command = [script] if isinstance(script, str) else list(script)

    def _done_marker(self, configuration: str) -> Path:
        return self.output_dir / f"DONE.{to_filename(configuration)}.DONE"

    def run(self, configuration: str, round_number: int, iteration: int) -> int:
        """Simulate a configuration unless its results already exist.

        Returns the script's exit status, or 0 when nothing had to be run.
        """
        if not is_valid_format(configuration):
            raise ConfigurationError(
                f"attempting to run incorrectly formatted configuration: {configuration!r}"
            )
        if self._done_marker(configuration).exists():
            print(f"{round_number}.{iteration}.f")
            return 0
        print(f"{round_number}.{iteration}.g")
        completed = subprocess.run(
            [*self.command, *configuration.split(" ")],
            stdout=subprocess.DEVNULL,
            check=False,
        )
        return completed.returncode

    def load(self, configuration: str) -> dict[str, dict[str, float]]:
        """Read the statistics of every benchmark for a configuration.

        A summary of the extracted values is also written for each benchmark.
        """
        stem = f"{to_filename(configuration)}.simout"
        self.summary_dir.mkdir(parents=True, exist_ok=True)
        results: dict[str, dict[str, float]] = {}
        for prefix in BENCHMARK_PREFIXES:
            simout = self.output_dir / f"{prefix}{stem}"
            try:
                text = simout.read_text()
            except FileNotFoundError:
                text = ""
            values = parse_simout(text)
            summary = self.summary_dir / f"{prefix}{stem}.summary"
            summary.write_text("".join(f"{values[field]!r}\n" for field in FIELDS))
            results[prefix] = values
        return results