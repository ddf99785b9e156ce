"""ghostcal - activity calendar for human and agent coding hours."""

__version__ = "0.3.0"

__all__ = ["__version__"]
