"""HTTP API for the pair."""
