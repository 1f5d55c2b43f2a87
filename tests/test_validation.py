import pytest

from dsexplore.config import BASELINE, format_configuration, parse_configuration
from dsexplore.validation import l1_latency, ul2_latency, validate_configuration


def _with(configuration, **changes):
    values = list(parse_configuration(configuration))
    for index, value in changes.items():
        values[int(index[1:])] = value
    return format_configuration(values)


def test_baseline_is_valid():
    assert validate_configuration(BASELINE) is True


def test_l1_latency_table_entries():
    assert l1_latency(8, 1) == 1
    assert l1_latency(64, 4) == l1_latency(64, 1) + 2


def test_l1_latency_unsupported():
    assert l1_latency(128, 1) is None
    assert l1_latency(8, 8) is None


def test_ul2_latency_table_entries():
    assert ul2_latency(256, 4) == 8
    assert ul2_latency(2048, 16) == ul2_latency(2048, 4) + 2


def test_ul2_latency_unsupported():
    assert ul2_latency(64, 1) is None
    assert ul2_latency(128, 32) is None


def test_latencies_grow_with_associativity():
    assert l1_latency(16, 1) < l1_latency(16, 2) < l1_latency(16, 4)
    assert ul2_latency(512, 1) < ul2_latency(512, 2) < ul2_latency(512, 8)


def test_wrong_dl1_latency_is_invalid():
    assert validate_configuration(_with(BASELINE, d14=1)) is False


def test_wrong_il1_latency_is_invalid():
    assert validate_configuration(_with(BASELINE, d15=2)) is False


def test_wrong_ul2_latency_is_invalid():
    assert validate_configuration(_with(BASELINE, d16=4)) is False


def test_ul2_block_too_small_for_wide_core():
    # Width 8 needs 64-byte L1 blocks, so a 64-byte L2 block is too small.
    assert validate_configuration(_with(BASELINE, d0=3)) is False


def test_ul2_smaller_than_l1s_is_invalid():
    assert validate_configuration(_with(BASELINE, d10=0, d12=0)) is False


def test_non_constraint_dimensions_do_not_matter():
    changed = _with(BASELINE, d1=1, d2=1, d3=5, d4=3, d5=1, d13=4, d17=5)
    assert validate_configuration(changed) is True


@pytest.mark.parametrize("configuration", ["", "garbage", BASELINE + " 1"])
def test_malformed_is_invalid(configuration):
    assert validate_configuration(configuration) is False