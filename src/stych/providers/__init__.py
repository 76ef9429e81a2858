"""Concrete identity service providers."""
