"""Maintenance Settings API — hierarchical maintenance configuration service.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

__version__ = "1.0.0"
