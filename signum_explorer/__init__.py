"""Signum blockchain toolkit: node API access, price feeds, mining calculator, plot checks and database models."""

__version__ = "1.9.0"