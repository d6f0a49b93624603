"""Integration tests exercising the monitor with real sources and the display."""
