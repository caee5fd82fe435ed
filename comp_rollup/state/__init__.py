"""Employee records and the in-memory roster."""
