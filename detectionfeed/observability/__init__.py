"""Logging and metrics for detectionfeed."""
