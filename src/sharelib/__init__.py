"""Core library for SMB share definitions: validation, storage and backups."""
