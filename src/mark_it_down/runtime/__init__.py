"""Process-wide runtime services (telemetry)."""
