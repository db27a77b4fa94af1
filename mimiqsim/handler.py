"""Shared session state: the LaTeX report, OpenQASM text and randomness."""

from __future__ import annotations

import random
import subprocess
import sys
from pathlib import Path

_PREAMBLE = (
    "\\documentclass{article}\n"
    "\\usepackage[margin=1in]{geometry}\n"
    "\\usepackage{datetime}\n"
    "\\usepackage{qcircuit}\n"
    "\\usepackage{amsmath}\n"
    "\\usepackage{pgfplots}\n"
    "\\pgfplotsset{compat=1.18}\n"
    "\\usepackage[utf8]{inputenc}\n"
    "\\begin{document}\n"
    "\\begin{center}\n"
    "    {\\LARGE \\textbf{mimiQ++ Report}} \\\\\n"
    "    \\large \\today \\quad \\currenttime\n"
    "\\end{center}\n"
    "\\hrule\n"
    "\\vspace{1cm}\n"
)

QASM_HEADER = 'OPENQASM 2.0;\ninclude "qelib1.inc";\n'


class MimiqHandler:
    """Owns the report file in ``path`` and per-experiment drawing and QASM flags."""

    def __init__(self, path="") -> None:
        self.rng = random.Random()
        self.dir_path = Path(path)
        self.report_path = self.dir_path / "report.tex"
        self.latex_writer = open(self.report_path, "w", encoding="utf-8")
        self.latex_writer.write(_PREAMBLE)
        self.circuit_drawn = False
        self.report_generated = False
        self.qasm_gen = True
        self.can_qasm = True
        self.oqsm = QASM_HEADER

    def clean(self) -> None:
        """Reset the per-experiment state before the next experiment."""
        self.circuit_drawn = False
        self.qasm_gen = True
        self.can_qasm = True
        self.oqsm = ""

    def write_in_pdf(self, msg: str) -> None:
        """Append a paragraph to the report while it is still open."""
        if not self.latex_writer.closed:
            self.latex_writer.write(f"{msg}\n\n")

    def generate_report(self) -> bool:
        """Close the report, compile it with pdflatex and remove auxiliary files."""
        if not self.latex_writer.closed:
            self.report_generated = True
            self.latex_writer.write("\\end{document}")
            self.latex_writer.close()
        else:
            print(
                "Unable to generate report as either already generated "
                "earlier (or) writer closed",
                file=sys.stderr,
            )
        try:
            completed = subprocess.run(
                [
                    "pdflatex",
                    f"-output-directory={self.dir_path}",
                    str(self.report_path),
                ],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
            succeeded = completed.returncode == 0
        except OSError:
            succeeded = False

        if succeeded:
            print(f"PDF generated: {self.report_path.with_suffix('.pdf')}")
        else:
            print("Error occurred during latex compilation.", file=sys.stderr)

        for suffix in (".log", ".aux"):
            self.report_path.with_suffix(suffix).unlink(missing_ok=True)
        return succeeded