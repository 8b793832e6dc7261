"""Runtime services (telemetry) shared across the sync core."""
