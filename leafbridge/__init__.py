"""Deployment configuration model, resource resolution, validation and event formatting."""

__version__ = "0.1.0"