"""Root conftest — shared test configuration."""

import os

# Tests never touch a real database or seed on import
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SEED_ON_STARTUP", "false")
