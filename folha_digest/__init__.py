"""Daily Folha de S.Paulo headline digest delivered by email."""

__version__ = "1.0.0"
