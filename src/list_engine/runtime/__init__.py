"""Runtime services (telemetry) shared by the list engine."""
