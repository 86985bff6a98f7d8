"""Smoke tests for the Todo Manager."""
