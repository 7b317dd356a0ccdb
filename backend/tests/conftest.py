"""Test-wide environment defaults."""

import os

# Route tests import the app module, which builds an engine from settings at import time.
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
