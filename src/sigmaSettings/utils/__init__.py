"""Utility helpers shared across sigmaSettings."""
