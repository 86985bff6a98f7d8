"""Security tests for the Todo Manager."""
