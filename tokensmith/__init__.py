"""Design-token code generation and change analysis."""

__version__ = "0.1.0"
