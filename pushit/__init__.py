"""Bump, tag and publish a module release into a site build manifest."""

__version__ = "0.1.0"
