"""
studyplan - Personalized study-plan engine for competitive-exam aspirants.

Packages:
- core: Enums, records, static tables, input schemas, errors
- study: Topic analysis, Brain Score, rank prediction, plan generation
- gamification: Achievements, daily challenges, greetings
- cli: Terminal front end over PlannerService

The engine is pure: every output is recomputed from topic-performance
rows, profile scalars and the current date.
"""

__version__ = "1.0.0"
