"""
Games tab content and the game overlays.

Each game card names the route it opens. The game screens themselves
(grids, word chains, riddles) are not part of navigation.
"""

from dataclasses import dataclass

from textual.app import ComposeResult
from textual.containers import Center, Middle, Vertical
from textual.widgets import Button, Static

from ..constants import ICON_TROPHY
from ..i18n import t
from .views import RouteView


@dataclass(frozen=True)
class GameInfo:
    id: str
    title_key: str
    difficulty: str
    route: str


GAMES = [
    GameInfo("memory-grid", "games.memoryGrid", "easy", "MemoryGrid"),
    GameInfo("word-chain", "games.wordChain", "medium", "WordChain"),
    GameInfo("echo-chronicles", "games.echoChronicles", "medium", "EchoChronicles"),
    GameInfo("riddles", "games.riddles", "easy", "Riddles"),
    # No LetterLink route is registered yet, so this card is disabled
    GameInfo("letter-link", "games.letterLink", "medium", "LetterLink"),
    GameInfo("family-quiz", "games.familyQuiz", "easy", "FamilyQuiz"),
]


class GamesView(RouteView):
    """Game cards, one button per game, plus the leaderboard"""

    DEFAULT_CSS = """
    GamesView {
        width: 100%;
        height: 100%;
        align: center top;
    }

    GamesView Button {
        width: 40;
        margin: 0 0 1 0;
    }
    """

    def compose_view(self) -> ComposeResult:
        registry = self.app.router.registry
        with Vertical():
            for game in GAMES:
                yield Button(
                    f"{t(game.title_key)}  [dim]{game.difficulty}[/]",
                    id=f"game-{game.id}",
                    disabled=game.route not in registry,
                )
            yield Button(f"{ICON_TROPHY} {t('games.leaderboard')}", id="game-leaderboard", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "game-leaderboard":
            self.app.navigate("Leaderboard")
            return
        for game in GAMES:
            if event.button.id == f"game-{game.id}":
                self.app.navigate(game.route)
                return


class MemoryGridView(RouteView):
    """Shared by MemoryGrid, MemoryQuiz and FamilyQuiz"""

    DEFAULT_CSS = """
    MemoryGridView {
        width: 100%;
        height: 100%;
        align: center middle;
    }
    """

    def compose_view(self) -> ComposeResult:
        with Center():
            with Middle():
                yield Static(t("games.memoryGrid"), id="memory-grid-title")
