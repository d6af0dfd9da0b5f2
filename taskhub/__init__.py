"""Project and task management API with role based access control."""

__version__ = "1.0.0"
