"""
Use Cases

Organized into domain folders:
- auth/: Registration, login and sessions
- invitations/: Invitation codes
- connections/: DOM/SUB connections
- stages/: Stages and their tasks, rules and goals
- progress/: Points and stage advancement
- profiles/: Onboarding profiles

Import from subdirectories.
"""
