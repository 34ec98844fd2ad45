"""Centralized configuration for Kuadrat.

This module defines:
- Comparison tolerance used by every approximate-equality and zero test
- Output precision for printed roots
- Residual tolerance for independent verification
- Self-test runner defaults

Configuration can be overridden via:
- Environment variables (prefixed with KUADRAT_), read once at import time
- CLI flags for runner behaviour (see cli.py)
"""

import importlib.metadata
import os

try:
    VERSION = importlib.metadata.version("kuadrat")
except importlib.metadata.PackageNotFoundError:
    # Running from a source checkout
    VERSION = "1.0.0"

# Numeric tolerance shared by numeric.is_zero and numeric.compare
EPSILON = float(os.getenv("KUADRAT_EPSILON", "1e-9"))

# Significant digits for %g-style root output (C's %lg default)
OUTPUT_PRECISION = int(os.getenv("KUADRAT_OUTPUT_PRECISION", "6"))

# Relative tolerance for exact-residual checks in verify.py
RESIDUAL_TOLERANCE = float(os.getenv("KUADRAT_RESIDUAL_TOLERANCE", "1e-9"))

# Stop the self-test run at the first failing fixture
FAIL_FAST = os.getenv("KUADRAT_FAIL_FAST", "true").lower() == "true"
