"""Personal calendar backend: events, goals and tasks plus the calendar interaction model."""

__version__ = "1.0.0"
