"""Shareable weekly availability service."""
