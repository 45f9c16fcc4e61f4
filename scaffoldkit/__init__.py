"""scaffoldkit — marker-based source wiring and conflict-aware file generation."""

__version__ = "0.1.0"
