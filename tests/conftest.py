"""Test configuration for the Student Store API."""

pytest_plugins = ["tests.fixtures"]
