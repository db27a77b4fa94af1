"""Aggregated outcomes of repeated shots of an experiment."""

from __future__ import annotations

import sys
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from .circuit import Experiment
from .handler import MimiqHandler
from .state_vector import StateVector


def latex_bar_chart(data: Iterable[tuple[str, object]]) -> str:
    """A pgfplots bar chart of ``(state, count)`` pairs."""
    pairs = [(str(state), str(count)) for state, count in data]
    coords = ", ".join(state for state, _ in pairs)
    points = "".join(f"({state},{count}) " for state, count in pairs)
    return (
        "\\begin{center}\n"
        "    \\begin{tikzpicture}\n"
        "        \\begin{axis}[\n"
        "            ybar,\n"
        f"            symbolic x coords={{{coords}}},\n"
        "            xtick=data,\n"
        "            xlabel={Quantum States},\n"
        "            ylabel={Counts},\n"
        "            ymin=0,\n"
        "            bar width=20pt,\n"
        "            width=10cm,\n"
        "            height=7cm,\n"
        "            nodes near coords,\n"
        "            nodes near coords align={vertical},\n"
        "            enlarge x limits=0.3,\n"
        "            title={Quantum State Counts}\n"
        "        ]\n"
        f"        \\addplot coordinates {{{points}}};\n"
        "        \\end{axis}\n"
        "    \\end{tikzpicture}\n"
        "\\end{center}\n"
    )


def _write_latex(handler: MimiqHandler, text: str) -> None:
    if not handler.latex_writer.closed:
        handler.latex_writer.write(text)


@dataclass
class Result:
    """Counts of classical register values over all shots, and the last shot's register."""

    handler: MimiqHandler
    n_cbits: int = 0
    counts: Counter = field(default_factory=Counter)
    creg: list[bool] = field(default_factory=list)
    state: Optional[StateVector] = None

    def _label(self, value: int) -> str:
        """Register value written with the last classical bit first."""
        if self.n_cbits == 0:
            return ""
        return format(value, f"0{self.n_cbits}b")[::-1]

    def print_counts(self) -> None:
        """Print the counts and add a bar chart of them to the report."""
        print("classical register readings for the simulation: ")
        chart = []
        for value in sorted(self.counts):
            label = self._label(value)
            print(f"{label}: {self.counts[value]}")
            chart.append((label, self.counts[value]))
        _write_latex(self.handler, latex_bar_chart(chart))
        print()
        _write_latex(self.handler, "\n\n")

    def generate_openqasm(self) -> None:
        """Print the recorded OpenQASM code and add it to the report."""
        print(self.handler.oqsm)
        self.handler.write_in_pdf("the OpenQASM 2.0 code for the above qircuit is: \n")
        _write_latex(self.handler, "\\begin{verbatim}\n")
        _write_latex(self.handler, f"{self.handler.oqsm}\\end{{verbatim}}\n")

    def get_counts_of(self, cbit: int) -> tuple[int, int]:
        """Number of shots in which classical bit ``cbit`` read 0 and read 1."""
        if not 0 <= cbit < self.n_cbits:
            raise IndexError(f"classical bit {cbit} out of range for {self.n_cbits} bits")
        mask = 1 << (self.n_cbits - 1 - cbit)
        ones = sum(n for value, n in self.counts.items() if value & mask)
        zeroes = sum(n for value, n in self.counts.items() if not value & mask)
        return zeroes, ones


def simulate(
    handler: MimiqHandler,
    func: Optional[Callable[[MimiqHandler], Experiment]] = None,
    shots: int = 1,
) -> Result:
    """Run the experiment ``func`` ``shots`` times and collect the register readings."""
    if func is None:
        raise ValueError("NULL Experiment error")
    if shots < 1:
        raise ValueError("at least one shot is needed")
    result = Result(handler)
    last: Optional[Experiment] = None
    for _ in range(shots):
        last = func(handler)
        if handler.latex_writer.closed:
            print("end of shot closed", file=sys.stderr)
        result.counts[last.c_reg_value] += 1

    result.n_cbits = last.n_cbits
    result.creg = [
        bool(last.c_reg_value & (1 << (last.n_cbits - 1 - k))) for k in range(last.n_cbits)
    ]
    result.state = last.final_state
    return result