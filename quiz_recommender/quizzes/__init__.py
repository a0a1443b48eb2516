"""Quiz types: one strategy object per quiz plus the registry that owns them.

Modules
-------
base      QuizStrategy base class, BookPick, shared weak-area and tag helpers
guna      Guna Profiler (trait-scored) strategy and guna profile calculation
shiva     Shiva Consciousness (archetype) strategy
tagged    Generic tag-only strategy for quizzes without dedicated rules
registry  QuizRegistry and default_registry()
"""
