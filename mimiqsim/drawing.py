"""Rendering of recorded circuit operations as a Qcircuit LaTeX figure."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Sequence

from .gates import GateNumber

_SEGMENT_WIDTH = 15


class Operation(IntEnum):
    """Kinds of operations recorded in a circuit's drawing order."""

    SINGLE_GATE = 1
    CONTROLLED_GATE = 2
    TWO_CONTROLLED_GATE = 3
    MEASURE = 4


@dataclass
class _Wire:
    label: str
    line: list[tuple[str, int]] = field(default_factory=list)
    pos: int = 1

    def __post_init__(self) -> None:
        self.line.append((self.label, 1))

    def push(self, text: str, length: int = 1) -> None:
        self.line.append((text, length))
        self.pos += 1

    def fill_below(self, limit: int, text: str) -> None:
        """Pad with ``text`` until ``pos`` reaches ``limit``."""
        while self.pos < limit:
            self.push(text)


def trim_zeroes(text: str) -> str:
    """Drop trailing zeroes after the decimal point, and the point if nothing is left."""
    point = text.find(".")
    if point == -1:
        return text
    head, tail = text[:point], text[point + 1:].rstrip("0")
    return f"{head}.{tail}" if tail else head


def _round3(value: float) -> float:
    scaled = abs(value) * 1000.0
    return math.copysign(math.floor(scaled + 0.5), value) / 1000.0


def _angle(value: float) -> str:
    return trim_zeroes(f"{_round3(value):f}")


def gate_label(key: int, euler: Optional[Sequence[float]]) -> tuple[str, int]:
    """LaTeX cell for a gate and the number of blocks it is wide.

    ``euler`` holds the gate's angles; it is needed only for parametric gates.
    """
    plain = {
        GateNumber.H: "\\gate{H} & ",
        GateNumber.X: "\\gate{X} & ",
        GateNumber.Y: "\\gate{Y} & ",
        GateNumber.Z: "\\gate{Z} & ",
        GateNumber.S: "\\gate{S} & ",
        GateNumber.SD: "\\gate{S^\\dag} & ",
        GateNumber.T: "\\gate{T} & ",
        GateNumber.TD: "\\gate{T^\\dag} & ",
    }
    if key in plain:
        return plain[GateNumber(key)], 1

    parametric = {
        GateNumber.U3: ("U", 3),
        GateNumber.IU3: ("IU3", 3),
        GateNumber.U1: ("U1", 1),
        GateNumber.U2: ("U2", 2),
        GateNumber.RX: ("Rx", 1),
        GateNumber.RY: ("Ry", 1),
    }
    if key not in parametric:
        return "", 1
    name, count = parametric[GateNumber(key)]
    if euler is None or len(euler) < count:
        raise ValueError(f"gate {name} needs {count} angle(s) to be drawn")
    angles = ",".join(_angle(a) for a in euler[:count])
    return f"\\gate{{{name}({angles})}} & ", 1 + count


def _euler_at(euler: Sequence[Sequence[float]], index: int):
    return euler[index] if 0 <= index < len(euler) else None


def draw_circuit(order, euler, n_qbits: int, n_cbits: int, name: str = "") -> str:
    """LaTeX figure of the circuit described by ``order``.

    Each entry of ``order`` starts with an :class:`Operation` code:
    single ``[1, target, gate, euler_index]``,
    controlled ``[2, target, gate, is_quantum, control, euler_index]``,
    doubly controlled ``[3, target, gate, is_quantum, control1, control2, euler_index]``,
    measure ``[4, qubit, cbit, to_print, basis]``.
    """
    if n_qbits < 1:
        raise ValueError("a circuit drawing needs at least one qubit")
    if n_cbits < 0:
        raise ValueError("number of classical bits must not be negative")

    qw = [_Wire(f"\\lstick{{q{i}}} & ") for i in range(n_qbits)]
    cw = [_Wire(f"\\lstick{{c{i}}} & ") for i in range(n_cbits)]
    maxt = 1

    for op in order:
        kind = op[0]
        if kind == Operation.SINGLE_GATE:
            target = qw[op[1]]
            target.pos += 1
            maxt = max(maxt, target.pos)
            target.line.append(gate_label(op[2], _euler_at(euler, op[3])))

        elif kind == Operation.TWO_CONTROLLED_GATE:
            tbit, gate, c1, c2 = op[1], op[2], op[4], op[5]
            top = min(tbit, c1, c2)
            bottom = max(tbit, c1, c2)
            mid = tbit + c1 + c2 - top - bottom
            for wire in range(top + 1, bottom):
                if wire != mid:
                    qw[wire].fill_below(maxt + 1, "\\qw & ")
            for wire in (mid, top, bottom):
                qw[wire].fill_below(maxt, "\\qw & ")
            qw[c1].push(f"\\ctrl{{{tbit - c1}}} & ")
            qw[c2].push(f"\\ctrl{{{tbit - c2}}} & ")
            qw[tbit].pos += 1
            qw[tbit].line.append(gate_label(gate, _euler_at(euler, 0)))
            maxt += 1

        elif kind == Operation.CONTROLLED_GATE:
            tbit, gate, is_quantum, control = op[1], op[2], op[3], op[4]
            if is_quantum == 1:
                low = min(control, tbit)
                high = tbit if low == control else control
                for wire in range(low + 1, high):
                    qw[wire].fill_below(maxt + 1, "\\qw & ")
                qw[low].fill_below(maxt, "\\qw & ")
                qw[high].fill_below(maxt, "\\qw & ")
                qw[control].push(f"\\ctrl{{{tbit - control}}} & ")
                qw[tbit].pos += 1
                qw[tbit].line.append(gate_label(gate, _euler_at(euler, 0)))
                maxt += 1
            elif is_quantum == 0:
                for wire in qw[tbit:]:
                    wire.fill_below(maxt, "\\qw & ")
                for wire in cw:
                    wire.fill_below(maxt, "\\cw & ")
                for wire in qw[tbit + 1:]:
                    wire.push("\\qw \\cwx & ")
                for index, wire in enumerate(cw):
                    if index == control:
                        wire.push("\\control \\cw \\cwx & ")
                    elif index < control:
                        wire.push("\\cw \\cwx & ")
                    else:
                        wire.push("\\cw & ")
                qw[tbit].pos += 1
                qw[tbit].line.append(gate_label(gate, _euler_at(euler, op[5])))
                maxt += 1

        elif kind == Operation.MEASURE:
            tbit, cbit = op[1], op[2]
            qw[tbit].fill_below(maxt, "\\qw & ")
            qw[tbit].push("\\meter & ")
            for wire in qw[tbit + 1:]:
                wire.fill_below(maxt, "\\qw & ")
            for wire in qw[tbit + 1:]:
                wire.push("\\qw \\cwx & ")
            for wire in cw[: cbit + 1]:
                wire.fill_below(maxt, "\\cw & ")
            for wire in cw[: cbit + 1]:
                wire.push("\\cw \\cwx & ")
            maxt += 1

    for wire in qw:
        wire.fill_below(maxt + 1, "\\qw & ")
        wire.line.append(("\\\\ ", 0))
    for wire in cw:
        wire.fill_below(maxt + 1, "\\cw & ")
        wire.line.append(("\\\\ ", 0))

    parts = [
        "\\clearpage\n\\section*{Quantum Circuit}\n",
        "\\begin{figure}[htbp]\n",
        "    \\centering\n",
        "    \\[\n",
        "    \\Qcircuit @C=1em @R=.7em {\n",
    ]

    columns = len(qw[0].line)
    breaks = [0]
    csum = 0
    for column in range(columns):
        csum += max(wire.line[column][1] for wire in qw)
        if csum > _SEGMENT_WIDTH:
            breaks.append(column)
            csum = 0

    step = min((b - a for a, b in zip(breaks, breaks[1:])), default=0xFFFFFFFF)
    bounds = list(range(0, columns + 1, step))
    print(" ".join(str(b) for b in bounds) + " ")

    def joined(wire: _Wire, start: int, stop: int) -> str:
        cells = (wire.line[k][0] for k in range(max(start, 1), stop))
        return wire.line[0][0] + "".join(cells)

    for start, stop in zip(bounds, bounds[1:]):
        parts.extend(f"{joined(w, start, stop)} \\qw & \\\\\n" for w in qw)
        parts.extend(f"{joined(w, start, stop)} \\cw & \\\\\n" for w in cw)
        parts.append("\\\\ \n\\\\ \n")

    last = bounds[-1]
    parts.extend(f"{joined(w, last, columns)}\n" for w in qw)
    parts.extend(f"{joined(w, last, columns)}\n" for w in cw)
    parts.append("\\\\ \n\\\\ \n")

    parts.append("}\n\\]\n")
    if name:
        parts.append(f"\\caption{{{name}}}\n")
    parts.append("\\end{figure}\n")
    return "".join(parts)