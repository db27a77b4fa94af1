"""A collection of textbook quantum experiments built on :class:`Qcircuit`."""

from __future__ import annotations

from .circuit import Experiment, Qcircuit
from .handler import MimiqHandler


def _teleport(qc: Qcircuit) -> None:
    qc.h(1)
    qc.cx(1, 2)
    qc.cx(0, 1)
    qc.h(0)
    qc.measure(0, 0)
    qc.measure(1, 1)
    qc.apply_controlled_gate("x", "c1", 2)
    qc.apply_controlled_gate("z", "c0", 2)


def quantum_teleportation_var1(handler: MimiqHandler) -> Experiment:
    """Teleport a U(0.3, 0.2, 0.1) state from qubit 0 to qubit 2."""
    qc = Qcircuit(handler, 3, 3, "quantum teleportation 1")
    qc.u(0, [0.3, 0.2, 0.1])
    _teleport(qc)
    qc.measure(2, 2)
    return qc.simulation()


def quantum_teleportation_var2(handler: MimiqHandler) -> Experiment:
    """Teleport a prepared state and undo the preparation on the receiving qubit."""
    qc = Qcircuit(handler, 3, 3, "quantum teleportation ibm")
    qc.u(0, [6.28, 0.408, 2.22])
    _teleport(qc)
    qc.u(2, [-6.28, -2.22, -0.408])
    qc.measure(2, 2)
    return qc.simulation()


def _superdense_decode(qc: Qcircuit) -> None:
    qc.h(0)
    qc.cx(0, 1)
    qc.apply_controlled_gate("z", "c1", 0)
    qc.apply_controlled_gate("x", "c0", 0)
    qc.cx(0, 1)
    qc.h(0)
    qc.measure(0, 3)
    qc.measure(1, 2)


def quantum_superdense_random(handler: MimiqHandler) -> Experiment:
    """Superdense coding of two random bits drawn from a third qubit."""
    qc = Qcircuit(handler, 3, 4, "superdense coding - random")
    qc.h(2)
    qc.measure(2, 0)
    qc.apply_controlled_gate("x", "c0", 2)
    qc.h(2)
    qc.measure(2, 1)
    _superdense_decode(qc)
    return qc.simulation()


def quantum_superdense(handler: MimiqHandler) -> Experiment:
    """Superdense coding of the fixed bits (c0, c1) = (0, 1)."""
    qc = Qcircuit(handler, 2, 4, "superdense coding")
    qc.x(0)
    qc.measure(0, 1)
    qc.x(0)
    _superdense_decode(qc)
    return qc.simulation()


def _oracle(qc: Qcircuit) -> None:
    qc.x(0)
    qc.h(2)
    qc.toffoli(0, 1, 2)
    qc.h(2)
    qc.x(0)


def _diffusion(qc: Qcircuit) -> None:
    for q in (0, 1, 2):
        qc.h(q)
    for q in (0, 1, 2):
        qc.x(q)
    qc.h(2)
    qc.toffoli(0, 1, 2)
    qc.h(2)
    for q in (1, 0, 2):
        qc.x(q)
    for q in (0, 1, 2):
        qc.h(q)


def _measure_all(qc: Qcircuit, n: int) -> None:
    for q in range(n):
        qc.measure(q, q)


def grover(handler: MimiqHandler) -> Experiment:
    """Two Grover iterations over three qubits."""
    qc = Qcircuit(handler, 3, 3, "grover")
    for q in (2, 1, 0):
        qc.h(q)
    for _ in range(2):
        _oracle(qc)
        _diffusion(qc)
    _measure_all(qc, 3)
    return qc.simulation()


def grover2(handler: MimiqHandler) -> Experiment:
    """Grover search written gate by gate with a different oracle ordering."""
    qc = Qcircuit(handler, 3, 3, "grover by circuit")
    for q in (0, 1, 2):
        qc.h(q)
    for _ in range(2):
        qc.x(0)
        qc.h(2)
        qc.toffoli(0, 1, 2)
        qc.x(0)
        qc.h(2)
        for q in (0, 1, 2):
            qc.h(q)
        for q in (1, 0, 2):
            qc.x(q)
        qc.h(2)
        qc.toffoli(0, 1, 2)
        qc.h(2)
        for q in (1, 0, 2):
            qc.x(q)
        for q in (0, 1, 2):
            qc.h(q)
    _measure_all(qc, 3)
    return qc.simulation()


def _random_bit(qc: Qcircuit, cbit: int) -> None:
    """Draw a random bit from qubit 1 into ``cbit`` and reset the qubit."""
    qc.h(1)
    qc.measure(1, cbit)
    qc.apply_controlled_gate("x", f"c{cbit}", 1)


def bb84_qkd(handler: MimiqHandler) -> Experiment:
    """One round of BB84 key distribution with a possible eavesdropper.

    c0 alice's bit, c1 alice's basis, c2 bob's basis, c3 bob's reading,
    c4 whether eve intercepted, c5 eve's scratch bit.
    """
    qc = Qcircuit(handler, 2, 6, "BB84-ptcl QKD")
    _random_bit(qc, 0)
    qc.apply_controlled_gate("x", "c0", 0)
    _random_bit(qc, 1)
    qc.apply_controlled_gate("h", "c1", 0)

    _random_bit(qc, 4)
    if qc.access_creg(4):
        _random_bit(qc, 5)
        qc.apply_controlled_gate("x", "c5", 0)
        _random_bit(qc, 5)
        qc.apply_controlled_gate("h", "c5", 0)

    qc.h(1)
    qc.measure(1, 2)
    qc.measure(0, 3, 0, int(qc.access_creg(2)))
    return qc.simulation()


def quantum_full_adder(handler: MimiqHandler) -> Experiment:
    """Full adder of A=1 (q0), B=0 (q1) and carry-in 1 (q2); q3 is the carry-out."""
    qc = Qcircuit(handler, 4, 4, "full adder")
    qc.x(0)
    qc.x(2)
    qc.toffoli(0, 1, 2)
    qc.cx(0, 1)
    qc.toffoli(1, 2, 3)
    qc.cx(1, 2)
    qc.cx(0, 1)
    _measure_all(qc, 4)
    return qc.simulation()


def trial(handler: MimiqHandler) -> Experiment:
    """Small circuit exercising a Toffoli with an unset control."""
    qc = Qcircuit(handler, 3, 3, "trial")
    qc.h(0)
    qc.x(1)
    qc.toffoli(0, 2, 1)
    qc.measure(1, 2)
    return qc.simulation()


def _ccry(qc: Qcircuit, first: float, second: float) -> None:
    qc.toffoli(0, 1, 2)
    qc.cx(0, 2)
    qc.ry(2, [first])
    qc.cx(0, 2)
    qc.ry(2, [second])


def quantum_classification(handler: MimiqHandler) -> Experiment:
    """Distance-based classifier over two training points and one new point."""
    qc = Qcircuit(handler, 4, 4, "quantum classification")
    qc.h(0)
    qc.h(1)

    qc.cx(1, 2)
    qc.ry(2, [0.1105])
    qc.cx(1, 2)
    qc.ry(2, [-0.1105])
    qc.x(1)

    _ccry(qc, 0, 0)
    _ccry(qc, 0, 0)
    qc.x(0)

    _ccry(qc, -1.511125, 1.511125)
    _ccry(qc, 1.511125, -1.511125)

    qc.cx(0, 3)
    qc.h(1)
    qc.measure(1, 1)
    qc.measure(3, 3)
    return qc.simulation()