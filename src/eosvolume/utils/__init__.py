"""Utility functions for logging, error handling and composition input."""
