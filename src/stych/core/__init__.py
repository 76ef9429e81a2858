"""Core domain layer: models, exceptions and the provider interface."""
