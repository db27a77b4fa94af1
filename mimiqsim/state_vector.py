"""Amplitude vectors over the computational basis of a register of qubits."""

from __future__ import annotations

import math
from dataclasses import dataclass, field


def _num(value: float) -> str:
    """Format a float the way a default C-style stream would (6 significant digits)."""
    return f"{value:g}"


def _latex(handler, text: str) -> None:
    writer = handler.latex_writer
    if not writer.closed:
        writer.write(text)


def _basis_label(index: int, n_qbits: int) -> str:
    return format(index, f"0{max(n_qbits, 1)}b")


@dataclass
class StateVector:
    """Coefficients of all 2**n basis states; qubit 0 is the most significant bit."""

    n_qbits: int
    coeffs: list[complex] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.n_qbits < 0:
            raise ValueError("number of qubits must not be negative")
        expected = 1 << self.n_qbits
        if not self.coeffs:
            self.coeffs = [0j] * expected
        elif len(self.coeffs) != expected:
            raise ValueError(
                f"{self.n_qbits} qubits need {expected} coefficients, got {len(self.coeffs)}"
            )
        self.coeffs = [complex(c) for c in self.coeffs]

    @classmethod
    def ground(cls, n_qbits: int) -> StateVector:
        """The state |00...0> on ``n_qbits`` qubits."""
        coeffs = [0j] * (1 << n_qbits)
        coeffs[0] = 1 + 0j
        return cls(n_qbits, coeffs)

    def mask(self, bit: int) -> int:
        """Bit mask of qubit ``bit`` within a basis index."""
        if not 0 <= bit < self.n_qbits:
            raise IndexError(f"qubit {bit} out of range for {self.n_qbits} qubits")
        return 1 << (self.n_qbits - 1 - bit)

    def tensor(self, other: StateVector) -> StateVector:
        """Tensor product of this state with ``other``."""
        return StateVector(
            self.n_qbits + other.n_qbits,
            [a * b for a in self.coeffs for b in other.coeffs],
        )

    def measure_along(self, bit: int) -> tuple[complex, complex]:
        """Amplitudes for measuring 0 and 1 on ``bit``.

        Each result holds the root of the summed squared real parts as its real
        part and the root of the summed squared imaginary parts as its imaginary
        part, so ``abs(z) ** 2`` is the outcome's probability.
        """
        tmask = self.mask(bit)
        sums = {0: [0.0, 0.0], 1: [0.0, 0.0]}
        for index, coeff in enumerate(self.coeffs):
            acc = sums[1 if index & tmask else 0]
            acc[0] += coeff.real * coeff.real
            acc[1] += coeff.imag * coeff.imag
        return tuple(
            complex(math.sqrt(sums[k][0]), math.sqrt(sums[k][1])) for k in (0, 1)
        )

    def report(self, handler) -> None:
        """Print every basis amplitude and write them to the handler's LaTeX report."""
        _latex(handler, "\\text{The state_ vector for the last shot is as follows: }")
        _latex(handler, "\\[\n\\begin{array}{@{}llll@{}}\n")
        print()
        print(f"number of qbits = {self.n_qbits}")
        for index, coeff in enumerate(self.coeffs):
            label = _basis_label(index, self.n_qbits)
            percent = _num(abs(coeff) ** 2 * 100)
            real, imag = _num(coeff.real), _num(coeff.imag)
            _latex(
                handler,
                f"\\text{{{label}:}} & {percent}\\% & {real} |0\\rangle &  "
                f"{imag} |1\\rangle \\\\\n",
            )
            print(f"{label} =>{percent}% ( {real} |0> + {imag} i |1> )")
        _latex(handler, "\\end{array}\n\\]\n")
        print()

    def probability_report(self, handler) -> None:
        """Print and record the probability of |1> and |0> for every qubit."""
        _latex(handler, "\\begin{align*}\n")
        for bit in range(self.n_qbits):
            tmask = self.mask(bit)
            prob = sum(abs(c) ** 2 for i, c in enumerate(self.coeffs) if i & tmask)
            print(
                f"for qbit {bit}: Prob of |1> : {_num(prob)},  "
                f"Prob of |0> : {_num(1 - prob)}"
            )
            _latex(
                handler,
                f"\\text{{For qbit {bit}}} \\quad & \\text{{Probability of}} |1\\rangle: "
                f"{_num(prob)}, \\text{{Probability of}} |0\\rangle: {_num(1 - prob)} \\\\\n",
            )
        print()
        _latex(handler, "\\end{align*}\n")