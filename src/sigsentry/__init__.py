"""sigsentry - signature scanner for uploaded file content."""

__version__ = "0.1.0"
