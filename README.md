# mimiqsim

A small state-vector quantum circuit simulator. Circuits are built gate by
gate and every gate acts on the state vector at once; measurements collapse
the state at random and store the outcome in a classical register. Runs are
recorded in a LaTeX report (`report.tex`): a drawing of each circuit using the
`qcircuit` LaTeX package, a pgfplots bar chart of the classical register
counts, and the OpenQASM 2.0 code of the circuit. When `pdflatex` is on the
`PATH`, the report is compiled to `report.pdf`.

The package has no dependencies beyond the standard library.

## Installing

```
pip install .
```

## Running the bundled experiments

```
mimiqsim [directory]
```

`directory` is where `report.tex` (and `report.pdf`) are written; it defaults
to the current directory. The command runs, in turn:

- quantum teleportation (two variants) and superdense coding (fixed and
  random bits), 1024 shots each;
- BB84 key distribution with a possible eavesdropper, repeated until a
  50-bit key is agreed; the counts of common bases, eavesdropper rounds and
  detected errors, and the final key, are printed and the key is added to
  the report;
- Grover search, a quantum full adder and a small quantum classifier,
  1000 shots each.

For every experiment it prints the register counts and the OpenQASM code.
The experiments live in `mimiqsim.experiments`; `mimiqsim.cli.my_lab` runs
them all and `mimiqsim.cli.lab2` runs the small `trial` circuit ten times.

## Writing your own experiment

An experiment is a function that takes a `MimiqHandler`, builds a `Qcircuit`
and returns `qc.simulation()`. `simulate` runs it for a number of shots and
returns a `Result`:

```python
from mimiqsim.handler import MimiqHandler
from mimiqsim.circuit import Qcircuit
from mimiqsim.result import simulate


def bell(handler):
    qc = Qcircuit(handler, 2, 2, "bell pair")
    qc.h(0)
    qc.cx(0, 1)
    qc.measure(0, 0)
    qc.measure(1, 1)
    return qc.simulation()


handler = MimiqHandler("./")
res = simulate(handler, bell, 1024)
res.print_counts()
res.generate_openqasm()
print(res.get_counts_of(0))   # (shots where c0 read 0, shots where c0 read 1)
handler.clean()
handler.generate_report()
```

Notes on the pieces:

- `MimiqHandler(path)` opens `report.tex` in `path` straight away. The
  circuit is drawn and its OpenQASM code recorded only on the first shot of
  an experiment; call `handler.clean()` before starting the next experiment.
  `handler.write_in_pdf(msg)` adds a paragraph to the report, and
  `handler.generate_report()` closes it, runs `pdflatex` and returns whether
  compilation succeeded.
- `Qcircuit(handler, n_qbits, n_cbits=0, name="")` starts in |00...0>.
  Gates: `u` (three angles), `u1`, `u2`, `x`, `y`, `z`, `h`, `s`, `sdg`, `t`,
  `tdg`, `ry`, `cx`, `ch`, `toffoli` / `ccx`, and `apply_controlled_gate`,
  whose control is a qubit (`"q1"`), a classical bit (`"c0"`) or two of them
  (`"q0,q1"`, `"c0,c1"`). Angles are passed as a list, e.g. `qc.ry(2, [0.5])`.
- `measure(tbit, cbit, to_print=0, basis=0)` returns the outcome; `basis=1`
  measures along |+>/|->. `access_creg`, `set_cbit0` and `set_cbit1` read and
  write the classical register while the circuit is being built, so later
  gates can depend on earlier outcomes.
- `simulate(handler, func, shots=1)` raises `ValueError` when `func` is
  missing or `shots` is less than one. `Result.counts` maps register values
  to shot counts, `Result.creg` holds the last shot's bits (c0 first), and
  `print_counts` labels each value with the last classical bit first.
- `mimiqsim.gates` holds the gate matrices and the controlled operations on a
  `StateVector` (`mimiqsim.state_vector`); `mimiqsim.drawing.draw_circuit`
  renders recorded operations as a LaTeX figure.

## What it does not do

- It does not read circuits from files: OpenQASM is only written, never
  parsed.
- Gates controlled by a qubit are limited to `h`, `x` and `z` (one control)
  and `x` (two controls); other combinations raise `ValueError`.
- Only the computational and the |+>/|-> bases can be measured in.
- Without `pdflatex` installed, only `report.tex` is produced.