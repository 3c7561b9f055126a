"""HTTP API for bulk uploads."""
