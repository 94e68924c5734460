"""Test environment: settings must be in place before any app module is imported."""

import os

os.environ.setdefault("APP_ENV", "dev")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-testing-only-do-not-use-in-production")
# Minimum bcrypt cost keeps hashing fast in tests
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SESSION_PURGE_ENABLED"] = "true"
