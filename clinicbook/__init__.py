"""A terminal appointment book for medical consultations kept in a text file."""

__version__ = "0.1.0"
__all__ = ["records", "cli"]