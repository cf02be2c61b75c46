"""motdyn - dynamic message of the day with live host facts."""

__version__ = "1.0.2"
