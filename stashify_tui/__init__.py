"""
Stashify - A Calm Memory Companion

A Textual TUI application providing:
- Home: daily greeting, reminders, quick links
- Games: memory grid, word chain, riddles and more
- Moments: golden moments to revisit
- Family: the family tree with names and faces
- Profile: settings and reports

Onboarding and a PIN login gate everything else.
"""

__version__ = "1.0.0"
