"""entrygen: build-time entry generation for Vue component projects."""

__version__ = "0.1.0"
