"""Core domain logic.

Modules:
- store: in-memory entity store
- models: entity dataclasses and range checks
- queries: read filters over the store
- progress: per-course progress upsert
- grader: quiz grading
- accounts: registration and login
- achievements: achievement catalog and awards
- stats: aggregate learner statistics
"""

__all__ = [
    "store",
    "models",
    "queries",
    "progress",
    "grader",
    "accounts",
    "achievements",
    "stats",
]
