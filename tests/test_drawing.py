import pytest

from mimiqsim.drawing import Operation, draw_circuit, gate_label, trim_zeroes
from mimiqsim.gates import GateNumber


@pytest.mark.parametrize(
    "text, expected",
    [
        ("0.300000", "0.3"),
        ("6.280000", "6.28"),
        ("1.000000", "1"),
        ("0.000000", "0"),
        ("42", "42"),
        ("100.000", "100"),
    ],
)
def test_trim_zeroes(text, expected):
    assert trim_zeroes(text) == expected


def test_plain_gate_labels():
    assert gate_label(GateNumber.H, None) == ("\\gate{H} & ", 1)
    assert gate_label(GateNumber.SD, None) == ("\\gate{S^\\dag} & ", 1)
    assert gate_label(GateNumber.TD, None) == ("\\gate{T^\\dag} & ", 1)


def test_u3_label_uses_angles_and_width():
    text, length = gate_label(GateNumber.U3, (0.3, 0.2, 0.1))
    assert text == "\\gate{U(0.3,0.2,0.1)} & "
    assert length == 4


def test_single_angle_label():
    text, length = gate_label(GateNumber.RY, (0.5, 0, 0))
    assert text == "\\gate{Ry(0.5)} & "
    assert length == 2


def test_unknown_gate_is_empty():
    assert gate_label(99, None) == ("", 1)


def test_parametric_gate_without_angles_raises():
    with pytest.raises(ValueError):
        gate_label(GateNumber.U3, None)


def test_single_h_worked_example():
    order = [[Operation.SINGLE_GATE, 0, GateNumber.H, -1]]
    out = draw_circuit(order, [], 1, 0, "")
    assert "\\lstick{q0} & \\gate{H} & \\qw & \\\\ \n" in out
    assert out.startswith("\\clearpage\n\\section*{Quantum Circuit}\n")
    assert "\\Qcircuit @C=1em @R=.7em {" in out
    assert out.endswith("}\n\\]\n\\end{figure}\n")
    assert "\\caption" not in out


def test_caption_is_written_when_named():
    out = draw_circuit([], [], 1, 1, "grover")
    assert "\\caption{grover}\n" in out
    assert "\\lstick{c0} & " in out


def test_measurement_draws_meter_and_classical_link():
    order = [[Operation.MEASURE, 0, 0, 0, 0]]
    out = draw_circuit(order, [], 2, 1, "m")
    assert "\\meter & " in out
    assert "\\qw \\cwx & " in out
    assert "\\cw \\cwx & " in out


def test_quantum_controlled_gate_draws_ctrl():
    order = [[Operation.CONTROLLED_GATE, 1, GateNumber.X, 1, 0, -1]]
    out = draw_circuit(order, [], 2, 0, "")
    assert "\\ctrl{1} & " in out
    assert "\\gate{X} & " in out


def test_toffoli_draws_two_controls():
    order = [[Operation.TWO_CONTROLLED_GATE, 2, GateNumber.X, 1, 0, 1, -1]]
    out = draw_circuit(order, [], 3, 0, "")
    assert "\\ctrl{2} & " in out
    assert "\\ctrl{1} & " in out


def test_classically_controlled_gate_draws_control_dot():
    order = [[Operation.CONTROLLED_GATE, 0, GateNumber.Z, 0, 1, -1]]
    out = draw_circuit(order, [], 1, 2, "")
    assert "\\control \\cw \\cwx & " in out
    assert "\\cw \\cwx & " in out


def test_parametric_single_gate_uses_euler_entry():
    order = [[Operation.SINGLE_GATE, 0, GateNumber.U3, 0]]
    out = draw_circuit(order, [(0.3, 0.2, 0.1)], 1, 0, "")
    assert "\\gate{U(0.3,0.2,0.1)} & " in out


def test_rows_are_equally_long_for_every_wire():
    order = [
        [Operation.SINGLE_GATE, 0, GateNumber.H, -1],
        [Operation.CONTROLLED_GATE, 2, GateNumber.X, 1, 0, -1],
        [Operation.MEASURE, 1, 1, 0, 0],
    ]
    out = draw_circuit(order, [], 3, 2, "")
    rows = [line for line in out.splitlines() if line.startswith("\\lstick")]
    assert len(rows) == 5
    cells = {row.count(" & ") for row in rows}
    assert len(cells) == 1


def test_long_circuit_is_split_into_segments():
    order = [[Operation.SINGLE_GATE, 0, GateNumber.H, -1] for _ in range(40)]
    out = draw_circuit(order, [], 2, 0, "")
    assert out.count("\\lstick{q0}") > 1
    assert out.count("\\lstick{q0}") == out.count("\\lstick{q1}")
    assert " \\qw & \\\\\n" in out
    assert out.count("\\gate{H} & ") == 40


def test_no_qubits_raises():
    with pytest.raises(ValueError):
        draw_circuit([], [], 0, 1, "")