"""
Leaf screens for the tabs and the forms.

Each one shows which route it is and offers the buttons that issue
navigation requests. Everything goes through app.navigate(), so no
screen touches another tab's stack.
"""

from datetime import datetime

from textual.app import ComposeResult
from textual.containers import Center, Container, Middle, Vertical
from textual.widgets import Button, Static

from ..i18n import get_language, t

# Shown until moments and family members come from storage
SAMPLE_MOMENTS = [
    ("m-wedding", "Wedding day, 1978"),
    ("m-first-home", "Our first home"),
    ("m-temple", "Temple festival"),
]

SAMPLE_MEMBERS = [
    ("f-lakshmi", "Lakshmi (daughter)"),
    ("f-arjun", "Arjun (grandson)"),
]


class RouteView(Container):
    """Base for leaf screens: takes the validated params of its route"""

    DEFAULT_CSS = """
    RouteView {
        width: 100%;
        height: 100%;
        align: center top;
    }

    RouteView Button {
        width: 40;
        margin: 0 0 1 0;
    }

    RouteView .view-heading {
        width: 100%;
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }
    """

    def __init__(self, params=None, **kwargs):
        super().__init__(**kwargs)
        self.params = dict(params or {})

    def compose_view(self) -> ComposeResult:
        """Build the screen. Called by the render boundary, not by Textual."""
        yield from ()


class PlaceholderView(RouteView):
    """Coming soon message for screens without content yet"""

    def __init__(self, params=None, title_key: str = "", **kwargs):
        super().__init__(params, **kwargs)
        self.title_key = title_key

    def compose_view(self) -> ComposeResult:
        with Center():
            with Middle():
                yield Static(f"{t(self.title_key)}\n\n[dim]{t('common.back')}[/]", classes="view-heading")


class HomeView(RouteView):
    """Greeting plus quick links into the other tabs and overlays"""

    def _greeting(self) -> str:
        hour = datetime.now().hour
        if hour < 12:
            return t("companion.greeting")
        if hour < 17:
            return t("companion.goodAfternoon")
        return t("companion.goodEvening")

    def compose_view(self) -> ComposeResult:
        user = getattr(self.app, "user", None)
        name = f", {user.name}" if user else ""
        with Vertical():
            yield Static(f"{self._greeting()}{name}", classes="view-heading")
            yield Button(t("companion.talk"), id="home-talk", variant="primary")
            yield Button(t("reminders.addReminder"), id="home-reminder")
            yield Button(t("games"), id="home-games")
            yield Button(t("moments"), id="home-moments")
            yield Button(t("family"), id="home-family")
            yield Button(t("games.familyQuiz"), id="home-quiz")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        requests = {
            "home-talk": ("VoiceCompanion", {}),
            "home-reminder": ("AddReminder", {}),
            "home-games": ("MainTabs", {"screen": "GamesTab"}),
            "home-moments": ("MainTabs", {"screen": "MomentsTab"}),
            "home-family": ("MainTabs", {"screen": "FamilyTab"}),
            "home-quiz": ("MemoryQuiz", {}),
        }
        if event.button.id in requests:
            self.app.navigate(*requests[event.button.id])


class MomentsView(RouteView):
    def compose_view(self) -> ComposeResult:
        with Vertical():
            yield Static(t("moments.goldenMoments"), classes="view-heading")
            yield Button(t("moments.add"), id="moments-add", variant="primary")
            for moment_id, title in SAMPLE_MOMENTS:
                yield Button(title, id=f"moment-{moment_id}")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id == "moments-add":
            self.app.navigate("AddMoment")
        elif button_id.startswith("moment-"):
            self.app.navigate("MomentDetail", {"momentId": button_id.removeprefix("moment-")})


class MomentDetailView(RouteView):
    """One moment, with a button to play it back"""

    def compose_view(self) -> ComposeResult:
        with Vertical():
            yield Static(self.params["momentId"], classes="view-heading")
            yield Button("Play", id="play-moment", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "play-moment":
            self.app.navigate("PlayMoment", {"momentId": self.params["momentId"]})


class FamilyView(RouteView):
    def compose_view(self) -> ComposeResult:
        with Vertical():
            yield Static(t("familyTree.title"), classes="view-heading")
            yield Button(t("familyTree.add"), id="family-add", variant="primary")
            for member_id, name in SAMPLE_MEMBERS:
                yield Button(name, id=f"member-{member_id}")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id == "family-add":
            self.app.navigate("AddFamilyMember")
        elif button_id.startswith("member-"):
            self.app.navigate("FamilyMemberDetail", {"memberId": button_id.removeprefix("member-")})


class ProfileView(RouteView):
    """Language, report and sign out"""

    def compose_view(self) -> ComposeResult:
        language = "English" if get_language() == "en" else "தமிழ்"
        with Vertical():
            yield Static(t("profile"), classes="view-heading")
            yield Button(f"{t('profile.language')}: {language}", id="profile-language")
            yield Button(t("profile.report"), id="profile-report")
            yield Button(t("profile.logout"), id="profile-logout", variant="error")

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "profile-language":
            await self.app.toggle_language()
        elif event.button.id == "profile-report":
            self.app.navigate("CognitiveReport")
        elif event.button.id == "profile-logout":
            await self.app.resolver.logout()
