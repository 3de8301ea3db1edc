"""Polyglot Journey learner progress and spaced-repetition service."""
