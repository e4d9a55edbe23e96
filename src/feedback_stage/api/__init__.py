"""HTTP API for Feedback Stage."""
