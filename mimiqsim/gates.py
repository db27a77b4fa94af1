"""Gate matrices and in-place controlled gate operations on state vectors."""

from __future__ import annotations

import math
from enum import IntEnum
from functools import reduce

from .state_vector import StateVector

Matrix = list[list[complex]]

_ROOT2 = math.sqrt(2)


class GateNumber(IntEnum):
    """Identifiers of the single-qubit gates."""

    H = 1
    X = 2
    Y = 3
    Z = 4
    S = 5
    SD = 6
    T = 7
    TD = 8
    RX = 9
    RY = 10
    U3 = 11
    IU3 = 12
    U1 = 13
    U2 = 14


def unitary_gate(theta: float, psi: float, lam: float) -> Matrix:
    """General single-qubit unitary from Euler angles; every basic gate derives from it."""
    half_cos = math.cos(theta / 2)
    half_sin = math.sin(theta / 2)
    return [
        [
            complex(half_cos, 0),
            complex(-math.cos(lam) * half_sin, -math.sin(lam) * half_sin),
        ],
        [
            complex(math.cos(psi) * half_sin, math.sin(psi) * half_sin),
            complex(half_cos * math.cos(lam + psi), half_cos * math.sin(lam + psi)),
        ],
    ]


def _swap_targets(sv: StateVector, controls: list[int], tbit: int) -> None:
    tmask = sv.mask(tbit)
    cmasks = [sv.mask(c) for c in controls]
    visited: set[int] = set()
    coeffs = sv.coeffs
    for index in range(len(coeffs)):
        if index in visited or not all(index & m for m in cmasks):
            continue
        other = index ^ tmask
        coeffs[index], coeffs[other] = coeffs[other], coeffs[index]
        visited.update((index, other))


def controlled_pauli_x(sv: StateVector, cbit: int, tbit: int) -> None:
    """Flip ``tbit`` wherever ``cbit`` is 1."""
    _swap_targets(sv, [cbit], tbit)


def toffoli(sv: StateVector, cbit1: int, cbit2: int, tbit: int) -> None:
    """Flip ``tbit`` wherever both control qubits are 1."""
    _swap_targets(sv, [cbit1, cbit2], tbit)


def controlled_hadamard(sv: StateVector, cbit: int, tbit: int) -> None:
    """Apply a Hadamard to ``tbit`` wherever ``cbit`` is 1."""
    cmask, tmask = sv.mask(cbit), sv.mask(tbit)
    factor = 1 / _ROOT2
    result = [0j] * len(sv.coeffs)
    for index, coeff in enumerate(sv.coeffs):
        if not index & cmask:
            result[index] = coeff
            continue
        if index & tmask:
            other = index & ~tmask
            result[index] -= factor * coeff
        else:
            other = index | tmask
            result[index] += factor * coeff
        result[other] += factor * coeff
    sv.coeffs = result


def matrix_multiply_2x2(g1: Matrix, g2: Matrix) -> Matrix:
    """Product of two 2x2 matrices."""
    return [
        [
            g1[0][0] * g2[0][0] + g1[0][1] * g2[1][0],
            g1[0][0] * g2[0][1] + g1[0][1] * g2[1][1],
        ],
        [
            g1[1][0] * g2[0][0] + g1[1][1] * g2[1][0],
            g1[1][0] * g2[0][1] + g1[1][1] * g2[1][1],
        ],
    ]


def controlled_pauli_z(sv: StateVector, cbit: int, tbit: int) -> None:
    """Negate amplitudes where both ``cbit`` and ``tbit`` are 1."""
    cmask, tmask = sv.mask(cbit), sv.mask(tbit)
    sv.coeffs = [
        c * -1 if (i & cmask and i & tmask) else c for i, c in enumerate(sv.coeffs)
    ]


def format_matrix(matrix: Matrix) -> str:
    """Text listing of a matrix, one row per line, as ``{real, imag}`` pairs."""
    if not matrix:
        return "empty \n"
    rows = (
        "".join(f"{{{e.real:g}, {e.imag:g}}} " for e in row) + "\n" for row in matrix
    )
    return "".join(rows) + "\n"


def kronecker(m1: Matrix, m2: Matrix) -> Matrix:
    """Kronecker product; an empty ``m1`` yields a copy of ``m2``."""
    if not m1:
        return [list(row) for row in m2]
    return [
        [a * b for a in row1 for b in row2]
        for row1 in m1
        for row2 in m2
    ]


def kronecker_buff(gate: Matrix, n_qbits: int, tbit: int) -> Matrix:
    """Full-register matrix applying ``gate`` to qubit ``tbit`` and identity elsewhere."""
    if n_qbits == 1:
        return gate
    identity = unitary_gate(0, 0, 0)
    factors = (gate if i == tbit else identity for i in range(n_qbits))
    return reduce(kronecker, factors, [])


def inverse_2x2(matrix: Matrix) -> Matrix:
    """Inverse of a 2x2 complex matrix."""
    (a, b), (c, d) = matrix
    det = a * d - b * c
    denom = det.real * det.real + det.imag * det.imag
    if denom == 0:
        raise ValueError("matrix is singular")
    scale = det.conjugate() / denom
    return [[scale * d, scale * -b], [scale * -c, scale * a]]