"""Test doubles shared by the test modules."""
