"""
Stashify Screens

Leaf screen widgets, keyed by screen name. A route renders the screen named
by its definition, so several routes can share one widget (MemoryQuiz and
FamilyQuiz both use the memory grid).

Screens are opaque to the routers: they get validated params and may only
issue navigation requests through the app.
"""

from functools import partial
from typing import Any, Mapping

from ..routes import RouteDefinition
from .boundary import ErrorFallback, ScreenBoundary
from .games import GamesView, MemoryGridView
from .views import (
    FamilyView,
    HomeView,
    MomentDetailView,
    MomentsView,
    PlaceholderView,
    ProfileView,
)

# Header title (i18n key) per screen name. Unknown screens use their name.
TITLE_KEYS = {
    "Home": "home",
    "Games": "games",
    "Moments": "moments.goldenMoments",
    "Family": "familyTree.title",
    "Profile": "profile",
    "CognitiveReport": "profile.report",
    "VoiceCompanion": "companion.talk",
    "MemoryGrid": "games.memoryGrid",
    "WordChain": "games.wordChain",
    "EchoChronicles": "games.echoChronicles",
    "Riddles": "games.riddles",
    "AddReminder": "reminders.addReminder",
    "Leaderboard": "games.leaderboard",
}

SCREENS = {
    "Home": HomeView,
    "Games": GamesView,
    "Moments": MomentsView,
    "MomentDetail": MomentDetailView,
    "Family": FamilyView,
    "Profile": ProfileView,
    "MemoryGrid": MemoryGridView,
}


def title_key_for(screen_name: str) -> str:
    return TITLE_KEYS.get(screen_name, screen_name)


def view_factory(screen_name: str):
    """Widget class (or partial) that renders a screen"""
    if screen_name in SCREENS:
        return SCREENS[screen_name]
    return partial(PlaceholderView, title_key=title_key_for(screen_name))


def create_boundary(route: RouteDefinition, params: Mapping[str, Any], **kwargs) -> ScreenBoundary:
    """Wrap the screen for a route in a render boundary"""
    return ScreenBoundary(route.name, view_factory(route.screen_name), params, **kwargs)


__all__ = [
    "ErrorFallback",
    "ScreenBoundary",
    "SCREENS",
    "TITLE_KEYS",
    "create_boundary",
    "title_key_for",
    "view_factory",
]
