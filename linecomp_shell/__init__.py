# linecomp_shell/__init__.py
"""
Minimal init to avoid import-time side effects.

Do NOT import app here: it builds a rich Console at import time.
"""

__version__ = "0.1.0"
__all__: list[str] = ["__version__"]
