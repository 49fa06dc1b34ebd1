"""
Stashify: Strings

t(key) returns the string for the current language. Missing Tamil strings
fall back to English, missing English strings fall back to the key itself.
Only header titles, tab labels and branch screens use this; routing never does.
"""

LANGUAGES = ("en", "ta")

STRINGS = {
    "en": {
        "home": "Home",
        "games": "Games",
        "moments": "Moments",
        "family": "Family",
        "profile": "Profile",
        "welcome": "Welcome back",
        "common.loading": "Loading...",
        "common.back": "Esc to go back",
        "common.error": "Something went wrong showing this screen.",
        "onboarding.title": "Let's get to know you",
        "onboarding.name": "Your name",
        "onboarding.pin": "Choose a 4-digit PIN",
        "onboarding.start": "Start",
        "onboarding.saveFailed": "Your profile could not be saved. Please try again.",
        "login.pin": "Enter your PIN",
        "login.signIn": "Sign In",
        "login.wrongPin": "That PIN didn't match. Try again.",
        "companion.talk": "Talk",
        "companion.greeting": "Good morning",
        "companion.goodAfternoon": "Good afternoon",
        "companion.goodEvening": "Good evening",
        "moments.add": "Add",
        "moments.goldenMoments": "Golden Moments",
        "familyTree.add": "Add",
        "familyTree.title": "Family Tree",
        "reminders.title": "Reminders",
        "reminders.addReminder": "Add Reminder",
        "profile.language": "Language",
        "profile.logout": "Sign Out",
        "profile.report": "Cognitive Report",
        "games.memoryGrid": "Memory Grid",
        "games.wordChain": "Word Chain",
        "games.echoChronicles": "Echo Chronicles",
        "games.riddles": "Riddles",
        "games.letterLink": "Letter Link",
        "games.familyQuiz": "Family Quiz",
        "games.leaderboard": "Leaderboard",
    },
    "ta": {
        "home": "முகப்பு",
        "games": "விளையாட்டுகள்",
        "moments": "தருணங்கள்",
        "family": "குடும்பம்",
        "profile": "சுயவிவரம்",
        "welcome": "மீண்டும் வருக",
        "common.loading": "ஏற்றுகிறது...",
        "login.pin": "உங்கள் PIN ஐ உள்ளிடவும்",
        "login.signIn": "உள்நுழைக",
        "companion.greeting": "காலை வணக்கம்",
        "companion.goodAfternoon": "மதிய வணக்கம்",
        "companion.goodEvening": "மாலை வணக்கம்",
        "moments.goldenMoments": "பொன்னான தருணங்கள்",
        "familyTree.title": "குடும்ப மரம்",
        "reminders.title": "நினைவூட்டல்கள்",
        "profile.language": "மொழி",
        "profile.logout": "வெளியேறு",
    },
}

_language = "en"


def set_language(language: str) -> None:
    global _language
    _language = language if language in LANGUAGES else "en"


def get_language() -> str:
    return _language


def t(key: str) -> str:
    """Look up a string in the current language."""
    value = STRINGS.get(_language, {}).get(key)
    if value is None:
        value = STRINGS["en"].get(key, key)
    return value
