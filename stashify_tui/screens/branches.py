"""
Top-level branch screens: Loading, Onboarding and Login.

Onboarding and Login never navigate. They only change the session, and the
root router picks the next branch from that.
"""

import logging

from textual.app import ComposeResult
from textual.containers import Center, Container, Middle, Vertical
from textual.screen import Screen
from textual.widgets import Button, Input, Static

from ..i18n import get_language, t
from ..session import OnboardingData

logger = logging.getLogger(__name__)

BRANCH_CSS = """
    #branch-dialog {
        width: 60;
        height: auto;
        padding: 2 4;
        background: $surface;
        border: heavy $primary;
    }

    #branch-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        color: $primary;
        margin-bottom: 1;
    }

    #branch-dialog Input {
        margin-bottom: 1;
    }

    #branch-message {
        width: 100%;
        text-align: center;
        color: $error;
        height: auto;
    }
"""


class LoadingScreen(Screen):
    """Shown until the session resolver has answered"""

    DEFAULT_CSS = """
    LoadingScreen {
        align: center middle;
        background: $background;
    }

    #loading-text {
        width: auto;
        color: $text-muted;
    }
    """

    def compose(self) -> ComposeResult:
        with Center():
            with Middle():
                yield Static(t("common.loading"), id="loading-text")


class OnboardingScreen(Screen):
    """Collects a name and a PIN, then creates the profile"""

    DEFAULT_CSS = "OnboardingScreen { align: center middle; }" + BRANCH_CSS

    def compose(self) -> ComposeResult:
        with Container(id="branch-dialog"):
            yield Static(t("onboarding.title"), id="branch-title")
            with Vertical():
                yield Input(placeholder=t("onboarding.name"), id="onboarding-name")
                yield Input(placeholder=t("onboarding.pin"), password=True, max_length=4, id="onboarding-pin")
                yield Button(t("onboarding.start"), id="onboarding-start", variant="primary")
            yield Static("", id="branch-message")

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id != "onboarding-start":
            return
        name = self.query_one("#onboarding-name", Input).value.strip()
        pin = self.query_one("#onboarding-pin", Input).value.strip()
        if not name or len(pin) != 4 or not pin.isdigit():
            self.query_one("#branch-message", Static).update(t("onboarding.pin"))
            return
        try:
            data = OnboardingData(name=name, pin=pin, language=get_language())
            await self.app.resolver.complete_onboarding(data)
        except OSError as e:
            logger.error("Could not save the new profile: %s", e)
            self.query_one("#branch-message", Static).update(t("onboarding.saveFailed"))


class LoginScreen(Screen):
    """PIN entry for a returning user"""

    DEFAULT_CSS = "LoginScreen { align: center middle; }" + BRANCH_CSS

    def compose(self) -> ComposeResult:
        with Container(id="branch-dialog"):
            yield Static(t("welcome"), id="branch-title")
            yield Input(placeholder=t("login.pin"), password=True, max_length=4, id="login-pin")
            yield Button(t("login.signIn"), id="login-submit", variant="primary")
            yield Static("", id="branch-message")

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        await self._sign_in()

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "login-submit":
            await self._sign_in()

    async def _sign_in(self) -> None:
        pin_input = self.query_one("#login-pin", Input)
        if not await self.app.resolver.login(pin_input.value.strip()):
            pin_input.value = ""
            self.query_one("#branch-message", Static).update(t("login.wrongPin"))
