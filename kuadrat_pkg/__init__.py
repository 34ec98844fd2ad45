"""Kuadrat package: quadratic equation solver with numeric utilities, printer, self-tests and CLI."""

__all__ = [
    "config",
    "numeric",
    "solver",
    "parser",
    "printer",
    "fixtures",
    "verify",
    "cli",
    "types",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "solve",
    "Solution",
    "SolutionKind",
    "compare",
    "is_zero",
    "normalize_signed_zero",
    "is_finite",
]
