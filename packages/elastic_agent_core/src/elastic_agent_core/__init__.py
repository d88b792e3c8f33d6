"""Shared logging and tracing setup for the elastic agent services."""
