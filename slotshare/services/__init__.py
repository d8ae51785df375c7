"""Availability domain services."""
