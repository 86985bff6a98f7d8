"""Unit tests for the Todo Manager."""
