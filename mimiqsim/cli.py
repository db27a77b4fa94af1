"""Command that runs the experiment lab and compiles the report."""

from __future__ import annotations

import argparse

from . import experiments
from .handler import MimiqHandler
from .result import Result, simulate

_KEY_SIZE = 50


def _run_and_report(handler: MimiqHandler, experiment, shots: int) -> Result:
    res = simulate(handler, experiment, shots)
    res.print_counts()
    res.generate_openqasm()
    handler.clean()
    return res


def _bb84_key(handler: MimiqHandler, key_size: int) -> str:
    common_basis = leaked_bits = eve_attacks = 0
    key = []
    while len(key) < key_size:
        res = simulate(handler, experiments.bb84_qkd)
        if res.creg[1] != res.creg[2]:
            continue
        common_basis += 1
        if res.creg[0] != res.creg[3]:
            leaked_bits += 1
        else:
            key.append("1" if res.creg[0] else "0")
        if res.creg[4]:
            eve_attacks += 1
    print(
        f"common bases: {common_basis} eveattacks: {eve_attacks} "
        f"detected eve attcks: {leaked_bits}"
    )
    return "".join(key)


def my_lab(handler: MimiqHandler) -> str:
    """Run every experiment, reporting each; returns the distributed BB84 key."""
    for experiment in (
        experiments.quantum_teleportation_var1,
        experiments.quantum_teleportation_var2,
        experiments.quantum_superdense,
        experiments.quantum_superdense_random,
    ):
        _run_and_report(handler, experiment, 1024)

    key = _bb84_key(handler, _KEY_SIZE)
    print(f"\nFINAL KEY: {key} length: {len(key)}")
    handler.write_in_pdf(f"Resultant key: {key}")
    handler.clean()

    for experiment in (
        experiments.grover,
        experiments.quantum_full_adder,
        experiments.quantum_classification,
    ):
        _run_and_report(handler, experiment, 1000)
    return key


def lab2(handler: MimiqHandler) -> Result:
    """Run the small trial circuit ten times."""
    res = simulate(handler, experiments.trial, 10)
    res.print_counts()
    res.generate_openqasm()
    return res


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="mimiqsim", description="Run the quantum experiment lab and build a report."
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default="",
        help="directory for the report (default: current directory)",
    )
    args = parser.parse_args(argv)
    handler = MimiqHandler(args.directory)
    try:
        my_lab(handler)
    finally:
        handler.generate_report()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())