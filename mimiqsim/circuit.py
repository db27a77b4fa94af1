"""Quantum circuits simulated one shot at a time on a state vector."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Optional, Sequence

from .drawing import Operation, draw_circuit
from .gates import (
    GateNumber,
    Matrix,
    controlled_hadamard,
    controlled_pauli_x,
    controlled_pauli_z,
    inverse_2x2,
    kronecker_buff,
    toffoli,
    unitary_gate,
)
from .handler import MimiqHandler
from .state_vector import StateVector

_PI = math.pi

_ALIASES = {
    "H": GateNumber.H, "h": GateNumber.H,
    "x": GateNumber.X, "X": GateNumber.X,
    "y": GateNumber.Y, "Y": GateNumber.Y,
    "z": GateNumber.Z, "Z": GateNumber.Z,
    "s": GateNumber.S, "S": GateNumber.S,
    "sd": GateNumber.SD, "Sd": GateNumber.SD,
    "T": GateNumber.T, "t": GateNumber.T,
    "Td": GateNumber.TD, "td": GateNumber.TD,
    "rx": GateNumber.RX, "Rx": GateNumber.RX,
    "ry": GateNumber.RY, "Ry": GateNumber.RY,
    "U3": GateNumber.U3, "u3": GateNumber.U3, "u": GateNumber.U3, "U": GateNumber.U3,
    "IU3": GateNumber.IU3, "iu3": GateNumber.IU3, "IU": GateNumber.IU3, "iu": GateNumber.IU3,
    "U1": GateNumber.U1, "u1": GateNumber.U1,
    "U2": GateNumber.U2, "u2": GateNumber.U2,
}

_FIXED_ANGLES = {
    GateNumber.H: (_PI / 2, 0, _PI),
    GateNumber.X: (_PI, 0, _PI),
    GateNumber.Y: (_PI, _PI / 2, _PI / 2),
    GateNumber.Z: (0, 0, _PI),
    GateNumber.S: (0, 0, _PI / 2),
    GateNumber.SD: (0, 0, -_PI / 2),
    GateNumber.T: (0, 0, _PI / 4),
    GateNumber.TD: (0, 0, -_PI / 4),
}

_PARAM_COUNT = {
    GateNumber.RX: 1,
    GateNumber.RY: 1,
    GateNumber.U3: 3,
    GateNumber.IU3: 3,
    GateNumber.U1: 1,
    GateNumber.U2: 2,
}

_CONTROL_RE = re.compile(r"^\s*(\S)\s*(\d+)\s*(?:,\s*(\S)\s*(\d+))?\s*$")


def _fmt(value: float) -> str:
    return f"{value:f}"


@dataclass
class Experiment:
    """Outcome of one shot: the classical register and the final state."""

    c_reg_value: int
    n_cbits: int
    final_state: StateVector


class Qcircuit:
    """A circuit whose gates act immediately on its state vector as they are added."""

    def __init__(
        self, handler: MimiqHandler, n_qbits: int, n_cbits: int = 0, name: str = ""
    ) -> None:
        if n_qbits < 1:
            raise ValueError("a circuit needs at least one qubit")
        if n_cbits < 0:
            raise ValueError("number of classical bits must not be negative")
        self.handler = handler
        self.name = name
        self.n_qbits = n_qbits
        self.n_cbits = n_cbits
        self.c_reg = 0
        self.state = StateVector.ground(n_qbits)
        self.order: list[list[int]] = []
        self.euler: list[tuple[float, float, float]] = []
        self._qasm(f"qreg q[{n_qbits}];\n")
        self._qasm(f"creg c[{n_cbits}];\n")

    # internal helpers

    def _qasm(self, text: str) -> None:
        if self.handler.qasm_gen:
            self.handler.oqsm += text

    def _check_qbit(self, qbit: int) -> None:
        if not 0 <= qbit < self.n_qbits:
            raise IndexError(f"qubit {qbit} out of range for {self.n_qbits} qubits")

    def _cmask(self, cbit: int) -> int:
        if not 0 <= cbit < self.n_cbits:
            raise IndexError(f"classical bit {cbit} out of range for {self.n_cbits} bits")
        return 1 << (self.n_cbits - 1 - cbit)

    def _resolve(self, gate: str, params: Sequence[float]) -> tuple[GateNumber, int, Matrix]:
        """Gate number, index of its stored angles (-1 if none) and its matrix."""
        kind = _ALIASES.get(gate)
        if kind is None:
            raise ValueError(f"unknown gate {gate!r}")
        if kind in _FIXED_ANGLES:
            return kind, -1, unitary_gate(*_FIXED_ANGLES[kind])
        needed = _PARAM_COUNT[kind]
        if len(params) < needed:
            raise ValueError(f"gate {gate!r} needs {needed} parameter(s)")
        given = [float(p) for p in params[:needed]]
        angles = tuple(given + [0.0] * (3 - needed))
        index = len(self.euler)
        self.euler.append(angles)
        a0, a1, a2 = angles
        if kind == GateNumber.RX:
            matrix = unitary_gate(a0, -_PI / 2, _PI / 2)
        elif kind == GateNumber.RY:
            matrix = unitary_gate(a0, 0, 0)
        elif kind == GateNumber.U3:
            matrix = unitary_gate(a0, a1, a2)
        elif kind == GateNumber.IU3:
            matrix = inverse_2x2(unitary_gate(a0, a1, a2))
        elif kind == GateNumber.U1:
            matrix = unitary_gate(0, 0, a0)
        else:
            matrix = unitary_gate(_PI / 2, a0, a1)
        return kind, index, matrix

    def _apply_gate(
        self, gate: str, t_qbit: int, params: Sequence[float] = (), record: bool = True
    ) -> None:
        self._check_qbit(t_qbit)
        kind, index, matrix = self._resolve(gate, params)
        if record:
            self.order.append([Operation.SINGLE_GATE, t_qbit, int(kind), index])
        full = kronecker_buff(matrix, self.n_qbits, t_qbit)
        coeffs = self.state.coeffs
        self.state.coeffs = [
            sum((m * c for m, c in zip(row, coeffs)), 0j) for row in full
        ]

    # controlled gates

    def apply_controlled_gate(
        self, gate: str, control: str, t_qbit: int, params: Sequence[float] = ()
    ) -> None:
        """Apply ``gate`` to ``t_qbit`` under ``control``.

        ``control`` names one or two control bits, e.g. ``"q0"``, ``"c1"`` or
        ``"q0,q1"``: ``q`` is a qubit, anything else a classical bit.
        """
        match = _CONTROL_RE.match(control)
        if match is None:
            raise ValueError(f"malformed control specification {control!r}")
        self._check_qbit(t_qbit)
        kind1, bit1, kind2, bit2 = match.groups()
        quantum1 = kind1 == "q"
        control1 = int(bit1)

        if kind2 is None:
            if quantum1:
                self._check_qbit(control1)
                gate_kind = _ALIASES.get(gate)
                if gate_kind not in (GateNumber.H, GateNumber.X, GateNumber.Z):
                    raise ValueError(f"gate {gate!r} cannot be controlled by a qubit")
            else:
                mask = self._cmask(control1)
                self._qasm(f"if ( c == {1 << control1}) {gate} q[{t_qbit}];\n")
                if self.c_reg & mask:
                    self._apply_gate(gate, t_qbit, params, record=False)
            kind, index, _ = self._resolve(gate, params)
            self.order.append(
                [Operation.CONTROLLED_GATE, t_qbit, int(kind), int(quantum1), control1, index]
            )
            if quantum1:
                if kind == GateNumber.H:
                    controlled_hadamard(self.state, control1, t_qbit)
                elif kind == GateNumber.X:
                    controlled_pauli_x(self.state, control1, t_qbit)
                else:
                    controlled_pauli_z(self.state, control1, t_qbit)
            return

        quantum2 = kind2 == "q"
        control2 = int(bit2)
        if not quantum1 and not quantum2:
            mask1, mask2 = self._cmask(control1), self._cmask(control2)
            if self.c_reg & mask1 and self.c_reg & mask2:
                self._apply_gate(gate, t_qbit, params, record=False)
        kind, index, _ = self._resolve(gate, params)
        self.order.append(
            [
                Operation.TWO_CONTROLLED_GATE,
                t_qbit,
                int(kind),
                int(quantum1),
                control1,
                control2,
                index,
            ]
        )
        if quantum1 and quantum2 and kind == GateNumber.X:
            toffoli(self.state, control1, control2, t_qbit)

    # single-qubit gates

    def u(self, t_qbit: int, params: Sequence[float] = (), record: bool = True) -> None:
        """General unitary with angles (theta, phi, lambda)."""
        self._apply_gate("u", t_qbit, params, record)
        self._qasm(
            f"u({_fmt(params[0])},{_fmt(params[1])},{_fmt(params[2])}) q[{t_qbit}];\n"
        )

    def x(self, t_qbit: int, params: Sequence[float] = (), record: bool = True) -> None:
        """Pauli X."""
        self._apply_gate("x", t_qbit, params, record)
        self._qasm(f"x q[{t_qbit}];\n")

    def y(self, t_qbit: int, params: Sequence[float] = (), record: bool = True) -> None:
        """Pauli Y."""
        self._apply_gate("y", t_qbit, params, record)
        self._qasm(f"y q[{t_qbit}];\n")

    def z(self, t_qbit: int, params: Sequence[float] = (), record: bool = True) -> None:
        """Pauli Z."""
        self._apply_gate("z", t_qbit, params, record)
        self._qasm(f"z q[{t_qbit}];\n")

    def h(self, t_qbit: int, params: Sequence[float] = (), record: bool = True) -> None:
        """Hadamard."""
        self._apply_gate("h", t_qbit, params, record)
        self._qasm(f"h q[{t_qbit}];\n")

    def u2(self, t_qbit: int, params: Sequence[float] = (), record: bool = True) -> None:
        """U2 gate with angles (phi, lambda)."""
        self._apply_gate("u2", t_qbit, params, record)
        self._qasm(f"u(pi/2,{_fmt(params[0])},{_fmt(params[1])}) q[{t_qbit}];\n")

    def u1(self, t_qbit: int, params: Sequence[float] = (), record: bool = True) -> None:
        """U1 phase gate with angle lambda."""
        self._apply_gate("u1", t_qbit, params, record)
        self._qasm(f"u(0,0,{_fmt(params[0])}) q[{t_qbit}];\n")

    def t(self, t_qbit: int, params: Sequence[float] = (), record: bool = True) -> None:
        """T gate."""
        self._apply_gate("t", t_qbit, params, record)
        self._qasm(f"t q[{t_qbit}];\n")

    def tdg(self, t_qbit: int, params: Sequence[float] = (), record: bool = True) -> None:
        """Adjoint of T."""
        self._apply_gate("td", t_qbit, params, record)
        self._qasm(f"tdg q[{t_qbit}];\n")

    def s(self, t_qbit: int, params: Sequence[float] = (), record: bool = True) -> None:
        """S gate."""
        self._apply_gate("s", t_qbit, params, record)
        self._qasm(f"s q[{t_qbit}];\n")

    def sdg(self, t_qbit: int, params: Sequence[float] = (), record: bool = True) -> None:
        """Adjoint of S."""
        self._apply_gate("sd", t_qbit, params, record)
        self._qasm(f"sdg q[{t_qbit}];\n")

    def ry(self, t_qbit: int, params: Sequence[float] = (), record: bool = True) -> None:
        """Rotation about Y by ``params[0]``."""
        self._apply_gate("ry", t_qbit, params, record)
        self._qasm(f"ry({_fmt(params[0])}) q[{t_qbit}];\n")

    # multi-qubit gates

    def toffoli(self, c1_qbit: int, c2_qbit: int, t_qbit: int) -> None:
        """Doubly controlled X."""
        self.apply_controlled_gate("x", f"q{c1_qbit},q{c2_qbit}", t_qbit)
        self._qasm(f"ccx q[{c1_qbit}], q[{c2_qbit}], q[{t_qbit}];\n")

    def ccx(self, c1_qbit: int, c2_qbit: int, t_qbit: int) -> None:
        """Doubly controlled X."""
        self.toffoli(c1_qbit, c2_qbit, t_qbit)

    def cx(self, cbit: int, qbit: int) -> None:
        """Controlled X with qubit ``cbit`` as control."""
        self.apply_controlled_gate("x", f"q{cbit}", qbit)
        self._qasm(f"cx q[{cbit}], q[{qbit}];\n")

    def ch(self, cbit: int, qbit: int) -> None:
        """Controlled Hadamard with qubit ``cbit`` as control."""
        self.apply_controlled_gate("h", f"q{cbit}", qbit)
        self._qasm(f"ch q[{cbit}], q[{qbit}];\n")

    # classical register

    def print_creg(self) -> None:
        """Print the classical register as an integer."""
        print(f"creg: {self.c_reg}")

    def set_cbit1(self, cbit: int) -> None:
        """Set classical bit ``cbit`` to 1."""
        self.c_reg |= self._cmask(cbit)

    def set_cbit0(self, cbit: int) -> None:
        """Set classical bit ``cbit`` to 0."""
        self.c_reg &= ~self._cmask(cbit)

    def access_creg(self, cbit: int) -> bool:
        """Value of classical bit ``cbit``."""
        return bool(self.c_reg & self._cmask(cbit))

    # measurement

    def measure(self, tbit: int, cbit: int, to_print: int = 0, basis: int = 0) -> bool:
        """Measure qubit ``tbit`` into classical bit ``cbit`` and collapse the state.

        ``basis`` 0 measures along |0>/|1>, 1 along |+>/|->. Returns the outcome.
        """
        self._check_qbit(tbit)
        cmask = self._cmask(cbit)
        self._qasm(f"measure q[{tbit}] -> c[{cbit}];\n")

        if basis == 1:
            self._apply_gate("h", tbit, record=False)
            zero, one = self.state.measure_along(tbit)
            self._apply_gate("h", tbit, record=False)
        else:
            zero, one = self.state.measure_along(tbit)

        if to_print:
            print(f"for 0: {zero.real:g} {zero.imag:g}")
            print(f"for 1: {one.real:g} {one.imag:g}")

        prob = abs(one) ** 2
        random_value = self.handler.rng.random()
        outcome = random_value <= prob and prob > 0.0
        if to_print:
            print(f"Probability of measuring |1> on qubit {tbit}: {prob:g}")
            print(f"Probability of measuring |0> on qubit {tbit}: {1 - prob:g}")
            print(f"rand/prob: {random_value:g}/ {prob:g} res: {int(outcome)} {cmask}")

        if outcome:
            self.c_reg |= cmask
        else:
            self.c_reg &= ~cmask

        tmask = self.state.mask(tbit)
        kept = [bool(i & tmask) == outcome for i in range(len(self.state.coeffs))]
        norm = math.sqrt(
            sum(abs(c) ** 2 for c, keep in zip(self.state.coeffs, kept) if keep)
        )
        # surviving amplitudes are rescaled and keep only their real part
        self.state.coeffs = [
            complex(c.real / norm, 0.0) if keep and norm else 0j
            for c, keep in zip(self.state.coeffs, kept)
        ]

        self.order.append([Operation.MEASURE, tbit, cbit, to_print, basis])
        return outcome

    # finishing a shot

    def simulation(self) -> Experiment:
        """Finish the shot: draw the circuit once per experiment and report the outcome."""
        handler = self.handler
        if not handler.circuit_drawn:
            figure = draw_circuit(self.order, self.euler, self.n_qbits, self.n_cbits, self.name)
            if not handler.latex_writer.closed:
                handler.latex_writer.write(figure)
                handler.latex_writer.flush()
            handler.circuit_drawn = True
        handler.qasm_gen = False
        return Experiment(self.c_reg, self.n_cbits, self.state)


def state_of(experiment: Optional[Experiment]) -> Optional[StateVector]:
    """Final state of an experiment, or None when there is none."""
    return None if experiment is None else experiment.final_state