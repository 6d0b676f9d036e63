"""IRC client registration with optional STARTTLS upgrade."""

__version__ = "1.0.0"
