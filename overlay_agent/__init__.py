"""Natural-language command parsing for the overlay image agent."""

__version__ = "1.0.0"
