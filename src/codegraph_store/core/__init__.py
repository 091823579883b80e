"""Configuration, exceptions and startup helpers shared across the package."""
