"""2D sphere tracing against signed distance fields."""

__version__ = "0.1.0"
