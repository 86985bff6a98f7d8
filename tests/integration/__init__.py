"""Integration tests for the Todo Manager."""
