"""Test configuration and fixtures."""

import os

# Settings are read from the environment when a container first needs
# them, so defaults must be in place before any test builds one.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__ADMIN_EMAIL", "admin@example.com")
os.environ.setdefault("AUTH__JWT_SECRET", "test-secret-with-at-least-32-bytes-of-key")

import logfire  # noqa: E402

logfire.configure(send_to_logfire=False, console=False)
