"""Core configuration for Feedback Stage."""
