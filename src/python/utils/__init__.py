"""Numeric helpers for the trace viewer."""
