"""HTTP API for pitch detection."""
