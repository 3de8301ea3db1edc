"""
Learning bounded context - Domain layer.

This context tracks a learner's progress through an enrolled learning path:
- Lesson completions and the time spent on them
- Weekly checkpoint assessments gating advancement through the path
- The daily activity streak
- The spaced-repetition review schedule of vocabulary words

Aggregates:
- Progress: one per (learner, learning path) enrollment
"""
