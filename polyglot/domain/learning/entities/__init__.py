"""Entities of the learning context."""
