import pytest

from mimiqsim import experiments
from mimiqsim.handler import MimiqHandler
from mimiqsim.result import simulate


@pytest.fixture
def handler(tmp_path):
    h = MimiqHandler(tmp_path)
    yield h
    if not h.latex_writer.closed:
        h.latex_writer.close()


def _bits(value, n):
    return [bool(value & (1 << (n - 1 - k))) for k in range(n)]


def test_full_adder_is_deterministic(handler):
    res = simulate(handler, experiments.quantum_full_adder, 5)
    assert len(res.counts) == 1
    # A=1, B=0, carry-in=1: sum bit 0 on q2, carry-out 1 on q3, inputs restored
    assert res.creg == [True, False, False, True]


def test_trial_sets_only_last_bit(handler):
    res = simulate(handler, experiments.trial, 10)
    assert res.creg == [False, False, True]
    assert sum(res.counts.values()) == 10
    assert len(res.counts) == 1


def test_superdense_decodes_fixed_bits(handler):
    res = simulate(handler, experiments.quantum_superdense, 20)
    for value in res.counts:
        bits = _bits(value, 4)
        assert bits[3] == bits[1]
        assert bits[2] == bits[0]
    assert res.creg[1] is True


def test_superdense_random_decodes_every_shot(handler):
    res = simulate(handler, experiments.quantum_superdense_random, 40)
    assert sum(res.counts.values()) == 40
    for value in res.counts:
        bits = _bits(value, 4)
        assert bits[3] == bits[1]
        assert bits[2] == bits[0]


@pytest.mark.parametrize(
    "experiment",
    [experiments.quantum_teleportation_var1, experiments.quantum_teleportation_var2],
)
def test_teleportation_counts(handler, experiment):
    res = simulate(handler, experiment, 30)
    assert res.n_cbits == 3
    assert sum(res.counts.values()) == 30
    assert all(0 <= value < 8 for value in res.counts)


def test_teleportation_qasm(handler):
    simulate(handler, experiments.quantum_teleportation_var1, 5)
    assert "cx q[1], q[2];" in handler.oqsm
    assert "measure q[2] -> c[2];" in handler.oqsm
    assert handler.oqsm.count("qreg q[3];") == 1


@pytest.mark.parametrize("experiment", [experiments.grover, experiments.grover2])
def test_grover_counts(handler, experiment):
    res = simulate(handler, experiment, 10)
    assert res.n_cbits == 3
    assert sum(res.counts.values()) == 10
    assert handler.circuit_drawn


def test_bb84_agreeing_bases_without_eve_share_the_bit(handler):
    for _ in range(60):
        res = simulate(handler, experiments.bb84_qkd)
        assert res.n_cbits == 6
        if res.creg[1] == res.creg[2] and not res.creg[4]:
            assert res.creg[0] == res.creg[3]


def test_classification_measures_only_two_bits(handler):
    res = simulate(handler, experiments.quantum_classification, 5)
    assert sum(res.counts.values()) == 5
    for value in res.counts:
        bits = _bits(value, 4)
        assert not bits[0]
        assert not bits[2]