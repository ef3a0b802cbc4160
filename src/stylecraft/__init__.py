"""Stylecraft - styled text-to-image generation through an external provider."""

__version__ = "0.1.0"

__all__ = ["__version__"]
