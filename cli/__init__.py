"""Command-line client for the sensor data endpoint."""
