# dsexplore

`dsexplore` searches the design space of an 18-parameter superscalar
processor model for configurations that minimise an energy/delay/area
objective. Each candidate is simulated by an external worker script on five
benchmarks. The results are combined into per-benchmark figures of merit
and geometric-mean figures of merit, and the search follows a simple
simulated-annealing schedule.

## Objectives

The `dsexplore` command takes exactly one argument. Its first letter selects
what to optimise:

| Argument | Objective |
|----------|-----------|
| `e`      | ED²P: energy × delay² |
| `p`      | EDP: energy × delay |
| `d`      | EDAP: energy × delay × area |
| `D`      | ED²AP: energy × delay² × area |

```
dsexplore e
```

A missing, extra or unknown argument prints a message on standard error and
exits with status -1.

The run starts from the baseline configuration
`0 0 0 0 0 0 5 0 5 0 2 2 2 3 0 0 3 0`. It then performs 50 rounds of 20
proposals each. Every proposal is a configuration that has not been seen
before and that passes the design constraints. A proposal replaces the
current configuration when it beats the best value found so far for the
chosen objective. Otherwise it replaces it with a probability of
`2.71 ** -(1 + round / 5)`, which falls as the rounds go on. The best
configuration is tracked for all four metrics, whichever one is being
optimised. The random generator is seeded with 0, so runs are repeatable.

## Working directory

The command works in the current directory and creates `logs/`,
`summaryfiles/` and `rawProjectOutputData/` if they are missing.

- For each new configuration, `worker.sh` is run from the `PATH` with the
  18 digits as separate arguments. Its standard output is discarded.
  It must write the simulator output for each benchmark to
  `rawProjectOutputData/<n>.<dotted configuration>.simout`, where `<n>` is
  `0` to `4` and the dotted configuration is the configuration with its
  spaces replaced by dots. A configuration is not simulated again if
  `rawProjectOutputData/DONE.<dotted configuration>.DONE` exists.
- The statistics `sim_num_insn`, `sim_cycle`, `il1.accesses`,
  `dl1.accesses`, `ul2.accesses`, `ul2.misses` and `ul2.writebacks` are read
  from each output. A statistic is a line whose first word is the field name
  and whose second word is the value. Missing statistics and missing files
  read as zero. The extracted values are also written to
  `summaryfiles/<n>.<dotted configuration>.simout.summary`, one per line.
- A proposal whose first benchmark reports zero instructions counts as a
  failed run. `R` is printed and the proposal does not count towards the
  round.
- The command prints `<round>.<iteration>.g` when it starts a simulation and
  `<round>.<iteration>.f` when it finds existing results.
- `logs/min<OBJECTIVE>.log` (for example `logs/minED2P.log`) gets one line
  for the baseline and one line per counted proposal. Each line holds the
  geometric-mean EDP, ED²P, EDAP and ED²AP of the current configuration,
  first normalised to the baseline and then as absolute values.
- `logs/min<OBJECTIVE>.best` gets one line for each of EDP, ED²P, EDAP and
  ED²AP. Each line holds the best configuration, the same eight values, and
  then, for each benchmark, that metric's value and its ratio to the
  baseline.

## What it does not include

The processor simulator and the `worker.sh` script that drives it are not
part of this package. You must supply them. Without them, `dsexplore` has
no results to explore.

## Configurations

A configuration is 18 single digits separated by spaces. Each digit is an
index into one dimension, in this order: width, fetch speed, scheduling,
RUU size, LSQ size, memory ports, L1 data sets and associativity, L1
instruction sets and associativity, L2 sets, block size and associativity,
TLB sets, L1 data, L1 instruction and L2 latencies, and branch predictor.
The dimension names and sizes are in `dsexplore.config` as
`DIMENSION_NAMES` and `DIMENSION_CARDINALITY`.

`dsexplore.config` provides:

- `is_valid_format` checks the shape of a configuration string.
- `parse_configuration` turns a string into a tuple of ints.
- `format_configuration` turns 18 ints into a string.
- `to_filename` gives the dotted form of a configuration.
- `ConfigurationError`, a `ValueError`, is raised for malformed input.

`dsexplore.validation.validate_configuration` checks the design
constraints:

- The L1 block size is eight bytes per unit of width.
- The L2 block size is at least twice the L1 block size and at most 128.
- The L2 is at least as large as both L1 caches together.
- Each cache latency matches the one that `l1_latency` or `ul2_latency`
  gives for its size and associativity.

## Using the pieces from Python

```python
from dsexplore.config import parse_configuration
from dsexplore.metrics import area, cycle_time, l2_size
from dsexplore.validation import validate_configuration

baseline = "0 0 0 0 0 0 5 0 5 0 2 2 2 3 0 0 3 0"
print(parse_configuration(baseline))
print(validate_configuration(baseline))
print(cycle_time(baseline), l2_size(baseline), area(baseline))
```

`dsexplore.metrics` has the cost model:

- `cycle_time`, `energy_per_instruction` and `pipeline_leakage`
- `dl1_size`, `il1_size` and `l2_size`
- `cache_leakage`, `cache_leakage_for_size` and `access_energy`
- `area`

Its `ResultStore` holds simulator statistics per configuration and
benchmark, added with `add`. It computes `execution_time`, `edp`, `ed2p`,
`edap` and `ed2ap`. `metric` computes any `Metric` for one benchmark, and
`geomean` gives its geometric mean across the five benchmarks.

`dsexplore.runner.ExperimentRunner(output_dir, summary_dir, script)` runs
the worker script (`run`) and reads its results (`load`).
`parse_simout` extracts the statistics from one simulator output.

`dsexplore.proposal.propose_configuration` and
`generate_next_configuration` produce candidate design points for an
objective.

`dsexplore.explorer.Explorer(objective, runner, store, rng)` runs the
search. Its `run(log, rounds, iterations)` method returns the best
configuration for each metric, and `best_report` returns the lines of the
`.best` file. `dsexplore.explorer.main` is the command's entry point.

## Tests

```
pip install -e .[test]
pytest
```