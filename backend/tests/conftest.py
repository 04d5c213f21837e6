"""Root conftest: shared test configuration."""

import os

# Ensure tests never reach the real generator
os.environ.setdefault("RANDOM_USER_API_URL", "http://randomuser.invalid/api/")
os.environ.setdefault("LOG_FORMAT", "text")
