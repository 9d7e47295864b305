"""Poll-based file change monitoring: sessions, a polling monitor, events and filters."""

__version__ = "1.19.0"

__all__ = ["errors", "events", "logs", "paths", "poll", "factory", "library", "session"]