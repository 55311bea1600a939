"""Infrastructure Layer — database engine, sessions and cross-cutting concerns.

Invariants:
    - Infrastructure holds no domain rules; it only maps storage failures to core errors

Design Decisions:
    - Engine lifecycle owned by a single manager initialized in the FastAPI lifespan
"""
