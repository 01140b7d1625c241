"""Packaged data files: the slot catalog and the default settings."""
