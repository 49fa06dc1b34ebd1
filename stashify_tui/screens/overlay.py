"""
Overlay screens: one ModalScreen per mounted overlay route.

The overlay presenter is the source of truth. Escape asks the navigator to
dismiss the route; the app then pops this screen to match.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static

from ..i18n import t
from ..navigation import Overlay
from ..routes import Presentation
from . import create_boundary, title_key_for


class OverlayScreen(ModalScreen):
    """Hosts the leaf screen of one overlay route"""

    BINDINGS = [
        Binding("escape", "close", "Back", priority=True),
    ]

    DEFAULT_CSS = """
    OverlayScreen {
        align: center middle;
        background: rgba(0, 0, 0, 0.6);
    }

    #overlay-dialog {
        width: 80;
        height: 24;
        padding: 1 2;
        background: $surface;
        border: heavy $primary;
    }

    OverlayScreen.full-screen #overlay-dialog {
        width: 100%;
        height: 100%;
        border: none;
    }

    #overlay-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        color: $primary;
        margin-bottom: 1;
    }
    """

    def __init__(self, overlay: Overlay, **kwargs):
        super().__init__(**kwargs)
        self.overlay = overlay
        if overlay.route.presentation is Presentation.FULL_SCREEN_MODAL:
            self.add_class("full-screen")

    def compose(self) -> ComposeResult:
        with Container(id="overlay-dialog"):
            yield Static(t(title_key_for(self.overlay.route.screen_name)), id="overlay-title")
            yield create_boundary(self.overlay.route, self.overlay.params)

    def action_close(self) -> None:
        self.app.dismiss_overlay(self.overlay.route_name)
