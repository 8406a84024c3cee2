"""Test configuration and fixtures."""

import os

# Settings are read from the environment when a test container is built
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("CREDENTIALS__PBKDF2_SHA256_ROUNDS", "1000")
