"""Per-target delivery runtime: readiness polling, submission and response interpretation."""
