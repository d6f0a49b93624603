"""Unit tests for the fire alert monitor."""
