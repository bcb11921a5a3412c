"""Test-runner configuration."""

from hypothesis import settings

# SQLite commits hit the disk; per-example wall-clock deadlines make
# property tests flaky on slow filesystems.
settings.register_profile("default_no_deadline", deadline=None)
settings.load_profile("default_no_deadline")
