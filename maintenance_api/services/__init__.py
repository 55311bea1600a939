"""Services Layer — the store and the seed loader.

Invariants:
    - Services own IO (database sessions); rules they apply come from core/
    - Every write goes through MaintenanceStore, seed data included

Design Decisions:
    - Store bound per request to one AsyncSession plus the process-wide write lock
"""
