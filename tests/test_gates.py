import math

import pytest

from mimiqsim.gates import (
    GateNumber,
    controlled_hadamard,
    controlled_pauli_x,
    controlled_pauli_z,
    format_matrix,
    inverse_2x2,
    kronecker,
    kronecker_buff,
    matrix_multiply_2x2,
    toffoli,
    unitary_gate,
)
from mimiqsim.state_vector import StateVector


def _flat(matrix):
    return [e for row in matrix for e in row]


def _apply(matrix, coeffs):
    return [sum(m * c for m, c in zip(row, coeffs)) for row in matrix]


def _sample_state(n):
    raw = [complex(i + 1, (i % 3) - 1) for i in range(1 << n)]
    norm = math.sqrt(sum(abs(c) ** 2 for c in raw))
    return StateVector(n, [c / norm for c in raw])


def test_zero_angles_give_identity():
    assert _flat(unitary_gate(0, 0, 0)) == pytest.approx([1, 0, 0, 1])


@pytest.mark.parametrize("angles", [(0.3, 0.2, 0.1), (6.28, 0.408, 2.22), (math.pi / 2, 0, math.pi)])
def test_unitary_gate_is_unitary(angles):
    u = unitary_gate(*angles)
    adjoint = [[u[j][i].conjugate() for j in range(2)] for i in range(2)]
    product = matrix_multiply_2x2(adjoint, u)
    assert _flat(product) == pytest.approx(_flat(unitary_gate(0, 0, 0)))


def test_inverse_round_trip():
    u = unitary_gate(0.3, 0.2, 0.1)
    product = matrix_multiply_2x2(inverse_2x2(u), u)
    assert _flat(product) == pytest.approx(_flat(unitary_gate(0, 0, 0)))


def test_inverse_of_singular_matrix_raises():
    with pytest.raises(ValueError):
        inverse_2x2([[1, 2], [2, 4]])


def test_cx_flips_target_when_control_set():
    x_gate = unitary_gate(math.pi, 0, math.pi)
    sv = StateVector.ground(2)
    sv.coeffs = _apply(kronecker_buff(x_gate, 2, 0), sv.coeffs)
    controlled_pauli_x(sv, 0, 1)
    assert sv.coeffs == pytest.approx([0, 0, 0, 1], abs=1e-12)


def test_cx_leaves_ground_state_alone():
    sv = StateVector.ground(3)
    controlled_pauli_x(sv, 0, 2)
    assert sv == StateVector.ground(3)


def test_cx_is_involution():
    sv = _sample_state(3)
    original = list(sv.coeffs)
    controlled_pauli_x(sv, 2, 0)
    assert sv.coeffs != original
    controlled_pauli_x(sv, 2, 0)
    assert sv.coeffs == original


def test_toffoli_swaps_only_when_both_controls_set():
    sv = _sample_state(3)
    original = list(sv.coeffs)
    toffoli(sv, 0, 1, 2)
    assert sv.coeffs[:6] == original[:6]
    assert sv.coeffs[6] == original[7]
    assert sv.coeffs[7] == original[6]


def test_controlled_hadamard_is_involution():
    sv = _sample_state(2)
    original = list(sv.coeffs)
    controlled_hadamard(sv, 0, 1)
    controlled_hadamard(sv, 0, 1)
    assert sv.coeffs == pytest.approx(original)


def test_controlled_hadamard_matches_full_hadamard_on_control_subspace():
    sv = _sample_state(2)
    original = list(sv.coeffs)
    controlled_hadamard(sv, 0, 1)
    h = unitary_gate(math.pi / 2, 0, math.pi)
    expected_tail = _apply(h, original[2:])
    assert sv.coeffs[:2] == original[:2]
    assert sv.coeffs[2:] == pytest.approx(expected_tail)


def test_controlled_pauli_z_negates_only_both_set():
    sv = _sample_state(2)
    original = list(sv.coeffs)
    controlled_pauli_z(sv, 0, 1)
    assert sv.coeffs[:3] == original[:3]
    assert sv.coeffs[3] == -original[3]


def test_kronecker_with_empty_returns_second():
    m = unitary_gate(0.3, 0.2, 0.1)
    assert kronecker([], m) == m


def test_kronecker_block_structure():
    m = unitary_gate(0.3, 0.2, 0.1)
    result = kronecker(unitary_gate(0, 0, 0), m)
    assert len(result) == 4 and all(len(row) == 4 for row in result)
    assert result[2][2] == pytest.approx(m[0][0])
    assert result[3][3] == pytest.approx(m[1][1])
    assert result[0][2] == 0


def test_kronecker_buff_single_qubit_returns_gate():
    m = unitary_gate(0.3, 0.2, 0.1)
    assert kronecker_buff(m, 1, 0) is m


def test_kronecker_buff_matches_chain():
    m = unitary_gate(0.3, 0.2, 0.1)
    identity = unitary_gate(0, 0, 0)
    expected = kronecker(kronecker(identity, m), identity)
    assert kronecker_buff(m, 3, 1) == expected


def test_format_matrix_empty():
    assert format_matrix([]) == "empty \n"


def test_gate_numbers_index_distinct_gates():
    assert len({g.value for g in GateNumber}) == len(GateNumber)
    assert GateNumber(GateNumber.U3.value) is GateNumber.U3