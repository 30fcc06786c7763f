"""sharectl: SMB share definition manager."""

__version__ = "0.1.0"
