"""HTTP API for the samples."""
