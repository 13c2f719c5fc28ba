"""Environment shared by every test module; must be set before app.core.config is imported."""

import os

os.environ.setdefault("JWT_SECRET", "test-secret")
