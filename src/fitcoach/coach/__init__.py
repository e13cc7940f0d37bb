"""
FitCoach coaching features.

- generation: completion calls behind chat, plans, motivation and feedback
- plans: /workout, /diet, /motivation
- profile: /profile card
"""
