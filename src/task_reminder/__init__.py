"""Task reminder service: HTTP task intake plus a periodic due-task check."""

__version__ = "1.0.0"
