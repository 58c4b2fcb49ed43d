"""Telemetry logging and dashboard for rover missions."""
