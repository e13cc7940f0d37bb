"""
FitCoach front-ends.

- commands: command table shared by every transport
- telegram: python-telegram-bot application
- console: local rich chat for development
"""
