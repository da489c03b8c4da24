"""changetrack: employee profile change tracking and document lifecycle."""

__version__ = "1.0.0"
