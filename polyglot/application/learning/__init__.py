"""
Learning bounded context - Application layer.

Contains use cases for learner progress:
- Commands: Start a learning path, complete a lesson, submit a weekly
  assessment, review a vocabulary word
- Queries: List and get progress, list vocabulary due for review
"""
