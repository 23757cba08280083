"""Root conftest — shared test configuration."""

import os

# Deterministic settings regardless of the developer's .env
os.environ.setdefault("STRICT_ARGUMENT_DECODING", "false")
os.environ.setdefault("LOG_FORMAT", "text")
