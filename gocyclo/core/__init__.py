"""Core data model, configuration and analysis engine."""
