"""State-vector quantum circuit simulator with LaTeX reports and OpenQASM output."""

__version__ = "0.1.0"