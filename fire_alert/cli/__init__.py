"""Command-line entry point for the fire alert monitor."""
