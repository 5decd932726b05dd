"""Shared test fixtures and factory helpers."""
