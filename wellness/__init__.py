"""Wellness portal backend package."""
