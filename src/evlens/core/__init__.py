"""Core utilities: settings, errors, logging and pagination."""
