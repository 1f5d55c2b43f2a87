import pytest

from dsexplore.config import BASELINE, BENCHMARK_PREFIXES, FIELDS, ConfigurationError
from dsexplore.metrics import (
    OUT_OF_RANGE_COST,
    PERFECT_PREDICTOR_AREA,
    Metric,
    ResultStore,
    access_energy,
    area,
    cache_leakage,
    cache_leakage_for_size,
    cycle_time,
    dl1_size,
    energy_per_instruction,
    il1_size,
    l2_size,
    pipeline_leakage,
)

OOO_WIDE = "3 1 1 5 3 1 0 0 0 0 0 0 0 0 0 0 0 0"


def _with(config, index, value):
    parts = config.split(" ")
    parts[index] = str(value)
    return " ".join(parts)


def _counters(scale=1.0):
    return {
        prefix: {field: scale * (n + 1) * 1000.0 for n, field in enumerate(FIELDS)}
        for prefix in BENCHMARK_PREFIXES
    }


def test_baseline_core_tables():
    assert cycle_time(BASELINE) == pytest.approx(100e-12)
    assert energy_per_instruction(BASELINE) == pytest.approx(8e-12)
    assert pipeline_leakage(BASELINE) == pytest.approx(1e-3)


def test_wide_out_of_order_core_tables():
    assert cycle_time(OOO_WIDE) == pytest.approx(175e-12)
    assert energy_per_instruction(OOO_WIDE) == pytest.approx(27e-12)
    assert pipeline_leakage(OOO_WIDE) == pytest.approx(32e-3)


def test_cache_tables_at_bounds():
    assert cache_leakage_for_size(8192) == pytest.approx(125e-6)
    assert access_energy(8192) == pytest.approx(20e-12)
    assert cache_leakage_for_size(2097152) == pytest.approx(32e-3)
    assert access_energy(2097152) == pytest.approx(360e-12)
    assert cache_leakage_for_size(2097153) == OUT_OF_RANGE_COST
    assert access_energy(2097153) == OUT_OF_RANGE_COST


def test_cache_tables_increase_with_size():
    sizes = [4096, 16384, 65536, 262144, 1048576]
    leaks = [cache_leakage_for_size(s) for s in sizes]
    energies = [access_energy(s) for s in sizes]
    assert leaks == sorted(leaks)
    assert energies == sorted(energies)


def test_baseline_cache_sizes():
    assert dl1_size(BASELINE) == 8192
    assert il1_size(BASELINE) == 8192
    assert l2_size(BASELINE) == 262144


def test_cache_sizes_double_with_sets_and_ways():
    assert dl1_size(_with(BASELINE, 6, 6)) == 2 * dl1_size(BASELINE)
    assert il1_size(_with(BASELINE, 9, 1)) == 2 * il1_size(BASELINE)
    assert l2_size(_with(BASELINE, 12, 3)) == 2 * l2_size(BASELINE)


def test_cache_leakage_is_sum_of_caches():
    expected = sum(
        cache_leakage_for_size(size)
        for size in (dl1_size(BASELINE), il1_size(BASELINE), l2_size(BASELINE))
    )
    assert cache_leakage(BASELINE) == pytest.approx(expected)


def test_area_branch_predictor_contributions():
    no_predictor = area(_with(BASELINE, 17, 1))
    assert area(_with(BASELINE, 17, 2)) - no_predictor == pytest.approx(0.25)
    assert area(_with(BASELINE, 17, 5)) - no_predictor == pytest.approx(0.75)
    assert area(BASELINE) - no_predictor == pytest.approx(PERFECT_PREDICTOR_AREA)


def test_area_grows_with_width():
    narrow = area(_with(BASELINE, 17, 1))
    wide = area(_with(_with(BASELINE, 17, 1), 0, 3))
    assert wide > narrow


def test_malformed_configuration_rejected():
    with pytest.raises(ConfigurationError):
        cycle_time("0 0 0")


def test_store_contains_and_unknown():
    store = ResultStore()
    store.add(BASELINE, _counters())
    assert BASELINE in store
    assert OOO_WIDE not in store
    with pytest.raises(KeyError):
        store.value(OOO_WIDE, "0.", "sim_cycle")


def test_store_value_roundtrip_and_missing_default():
    store = ResultStore()
    store.add(BASELINE, {"0.": {"sim_cycle": 42.0}})
    assert store.value(BASELINE, "0.", "sim_cycle") == 42.0
    assert store.value(BASELINE, "0.", "ul2.misses") == 0.0
    assert store.value(BASELINE, "3.", "sim_cycle") == 0.0


def test_execution_time_uses_cycle_time():
    store = ResultStore()
    store.add(BASELINE, _counters())
    cycles = store.value(BASELINE, "0.", "sim_cycle")
    assert store.execution_time(BASELINE, "0.") == pytest.approx(cycle_time(BASELINE) * cycles)


def test_edp_is_zero_without_cycles():
    store = ResultStore()
    store.add(BASELINE, {"0.": {"sim_num_insn": 1000.0}})
    assert store.edp(BASELINE, "0.") == 0.0


def test_edp_grows_with_counters():
    small, large = ResultStore(), ResultStore()
    small.add(BASELINE, _counters(1.0))
    large.add(BASELINE, _counters(2.0))
    assert large.edp(BASELINE, "0.") > small.edp(BASELINE, "0.")


def test_derived_products_relations():
    store = ResultStore()
    store.add(BASELINE, _counters())
    edp = store.edp(BASELINE, "1.")
    time = store.execution_time(BASELINE, "1.")
    assert store.ed2p(BASELINE, "1.") == pytest.approx(edp * time)
    assert store.edap(BASELINE, "1.") == pytest.approx(edp * area(BASELINE))
    assert store.ed2ap(BASELINE, "1.") == pytest.approx(edp * time * area(BASELINE))


@pytest.mark.parametrize("metric", list(Metric))
def test_geomean_of_identical_benchmarks(metric):
    store = ResultStore()
    store.add(BASELINE, _counters())
    single = store.metric(BASELINE, "0.", metric)
    assert store.geomean(BASELINE, metric) == pytest.approx(single)


def test_metric_dispatch():
    store = ResultStore()
    store.add(BASELINE, _counters())
    assert store.metric(BASELINE, "2.", Metric.EDP) == store.edp(BASELINE, "2.")
    assert store.metric(BASELINE, "2.", Metric.ED2AP) == store.ed2ap(BASELINE, "2.")
    assert store.metric(BASELINE, "2.", Metric.AREA) == area(BASELINE)