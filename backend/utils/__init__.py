"""Shared helpers for the backend: dependencies, exceptions and middleware."""
