"""Shared test fixture factories."""
