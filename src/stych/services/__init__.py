"""Application services built on top of providers."""
