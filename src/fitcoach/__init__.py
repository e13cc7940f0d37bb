"""
FitCoach - AI FITCOACH PRO Telegram assistant.

Features:
- Onboarding: fixed questionnaire that builds the user's fitness profile
- Plans: workout and nutrition plans generated from the profile
- Progress: weight / mood / energy check-ins with encouragement
- Chat: free-form coaching conversation with profile context
"""

__version__ = "1.0.0"
