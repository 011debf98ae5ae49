"""Core configuration, logging, clock and error types."""
