#!/usr/bin/env python3
"""
Stashify - Main Textual TUI Application

A calm memory companion: reminders, memory games, golden moments and the
family tree, behind onboarding and a PIN login.

Keyboard controls:
- F1-F5: Switch tabs (Home, Games, Moments, Family, Profile)
- Escape: Back (closes the top overlay, or pops the current tab)
- F12: Toggle dark/light theme

The app owns no navigation state of its own. It mirrors the RootRouter:
the root state picks the screen, the active tab's stack picks the content,
and the overlay presenter picks which modal screens sit on top.
"""

import logging
from typing import Any, Mapping, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import Button, Static

from .constants import DATA_DIR, LOG_FILE, TAB_INFO, is_dev_mode, log_level
from .errors import ContractViolation, StashifyError
from .i18n import get_language, set_language, t
from .navigation import FeatureStack, HeaderAction, ResolvedRoute, RootRouter, RootState, StackEntry
from .routes import Tab
from .screens import create_boundary, title_key_for
from .screens.branches import LoadingScreen, LoginScreen, OnboardingScreen
from .screens.overlay import OverlayScreen
from .session import LocalSessionResolver, SessionResolver
from .settings import SettingsStore
from .theme import THEMES, theme, theme_name

logger = logging.getLogger(__name__)


class KeyBadge(Static):
    """A single key badge with rounded border"""

    DEFAULT_CSS = """
    KeyBadge {
        width: auto;
        height: 3;
        padding: 0 1;
        margin: 0 1;
        border: round $primary;
        background: $surface;
        content-align: center middle;
    }

    KeyBadge.active {
        border: round $accent;
        background: $primary;
        color: $background;
        text-style: bold;
    }

    KeyBadge.dim {
        border: round $surface-darken-2;
        color: $text-muted;
    }
    """

    def __init__(self, text: str, **kwargs):
        super().__init__(**kwargs)
        self.text = text

    def render(self) -> str:
        return self.text


class TabIndicator(Horizontal):
    """Tab bar with F-keys, the active tab highlighted"""

    DEFAULT_CSS = """
    TabIndicator {
        width: 100%;
        height: 3;
        background: $background;
        padding: 0 4;
    }
    """

    def __init__(self, active_tab: Tab, **kwargs):
        super().__init__(**kwargs)
        self.active_tab = active_tab

    def _label(self, tab: Tab) -> str:
        icon, label_key, key = TAB_INFO[tab.value]
        tokens = self.app.theme_tokens
        color = tokens["tab_icon_selected" if tab is self.active_tab else "tab_icon_default"]
        return f"{key} [{color}]{icon}[/] {t(label_key)}"

    def compose(self) -> ComposeResult:
        for tab in Tab:
            badge = KeyBadge(self._label(tab), id=f"tab-{tab.name.lower()}")
            badge.add_class("active" if tab is self.active_tab else "dim")
            yield badge

    def update_tab(self, tab: Tab) -> None:
        self.active_tab = tab
        for other in Tab:
            try:
                badge = self.query_one(f"#tab-{other.name.lower()}", KeyBadge)
            except NoMatches:
                continue
            badge.text = self._label(other)
            badge.remove_class("active", "dim")
            badge.add_class("active" if other is tab else "dim")
            badge.refresh()


class MainScreen(Screen):
    """
    The authenticated tree: header, the active tab's content, the tab bar.

    Each tab gets its own container. Inside it there is one boundary per
    stack entry; only the top one is displayed, so popping shows the
    previous screen exactly as it was left.
    """

    DEFAULT_CSS = """
    MainScreen {
        background: $background;
    }

    #header-row {
        width: 100%;
        height: 3;
        padding: 0 2;
    }

    #header-title {
        width: 1fr;
        height: 3;
        content-align: left middle;
        color: $primary;
        text-style: bold;
    }

    #header-actions {
        width: auto;
        height: 3;
    }

    #header-actions Button {
        min-width: 8;
        margin-left: 1;
    }

    #content-area {
        width: 100%;
        height: 1fr;
        border: heavy $primary;
        background: $surface;
        padding: 1;
    }

    .tab-content {
        width: 100%;
        height: 100%;
    }

    #tab-indicator {
        dock: bottom;
        height: 3;
    }
    """

    def __init__(self, router: RootRouter, **kwargs):
        super().__init__(**kwargs)
        self.router = router
        self._actions: dict[str, tuple[Tab, HeaderAction]] = {}

    def compose(self) -> ComposeResult:
        with Vertical():
            with Horizontal(id="header-row"):
                yield Static("", id="header-title")
                with Horizontal(id="header-actions"):
                    for tab in Tab:
                        stack = self.router.tabs.stack(tab)
                        for i, action in enumerate(stack.header_actions):
                            button_id = f"action-{tab.name.lower()}-{i}"
                            self._actions[button_id] = (tab, action)
                            yield Button(f"{action.icon} {t(action.label_key)}", id=button_id)
            yield Container(id="content-area")
        yield TabIndicator(self.router.tabs.active_tab, id="tab-indicator")

    def on_mount(self) -> None:
        self.sync()

    def sync(self) -> None:
        """Make the widgets match the tab router"""
        tabs = self.router.tabs
        content_area = self.query_one("#content-area")

        for tab, stack in tabs.stacks.items():
            try:
                container = content_area.query_one(f"#tab-content-{tab.name.lower()}", Container)
            except NoMatches:
                if tab is tabs.active_tab:
                    # Tabs are mounted the first time they are selected
                    content_area.mount(self._build_tab(tab, stack))
                continue
            container.display = tab is tabs.active_tab
            self._sync_stack(container, tab, stack)

        self._sync_header()
        try:
            self.query_one("#tab-indicator", TabIndicator).update_tab(tabs.active_tab)
        except NoMatches:
            pass

    def _entry_id(self, tab: Tab, entry: StackEntry) -> str:
        return f"entry-{tab.name.lower()}-{entry.pushed_at}"

    def _boundary(self, tab: Tab, entry: StackEntry, visible: bool):
        route = self.router.registry.get(entry.route_name)
        boundary = create_boundary(route, entry.params, id=self._entry_id(tab, entry))
        boundary.display = visible
        return boundary

    def _build_tab(self, tab: Tab, stack: FeatureStack) -> Container:
        boundaries = [self._boundary(tab, e, e is stack.visible) for e in stack.entries]
        return Container(*boundaries, id=f"tab-content-{tab.name.lower()}", classes="tab-content")

    def _sync_stack(self, container: Container, tab: Tab, stack: FeatureStack) -> None:
        wanted = {self._entry_id(tab, e): e for e in stack.entries}
        for child in list(container.children):
            if child.id not in wanted:
                child.remove()
        mounted = {child.id for child in container.children}
        top_id = self._entry_id(tab, stack.visible)
        for child in container.children:
            child.display = child.id == top_id
        for entry_id, entry in wanted.items():
            if entry_id not in mounted:
                container.mount(self._boundary(tab, entry, entry_id == top_id))

    def _sync_header(self) -> None:
        stack = self.router.tabs.active_stack
        route = self.router.registry.get(stack.visible.route_name)
        self.query_one("#header-title", Static).update(t(title_key_for(route.screen_name)))

        # Header actions belong to the tab's root screen
        for button_id, (tab, _) in self._actions.items():
            button = self.query_one(f"#{button_id}", Button)
            button.display = tab is stack.tab and stack.depth == 1

    def on_button_pressed(self, event: Button.Pressed) -> None:
        entry = self._actions.get(event.button.id or "")
        if entry is not None:
            event.stop()
            self.app.run_action_request(entry[1])


class StashifyApp(App):
    """
    Stashify - A calm memory companion.

    F1-F5: Switch tabs
    Escape: Back
    F12: Toggle dark/light mode
    """

    TITLE = "Stashify"

    BINDINGS = [
        Binding("f1", "select_tab('HomeTab')", "Home", show=False, priority=True),
        Binding("f2", "select_tab('GamesTab')", "Games", show=False, priority=True),
        Binding("f3", "select_tab('MomentsTab')", "Moments", show=False, priority=True),
        Binding("f4", "select_tab('FamilyTab')", "Family", show=False, priority=True),
        Binding("f5", "select_tab('ProfileTab')", "Profile", show=False, priority=True),
        Binding("escape", "back", "Back", show=False),
        Binding("f12", "toggle_theme", "Theme", show=False, priority=True),
    ]

    def __init__(
        self,
        resolver: Optional[SessionResolver] = None,
        settings: Optional[SettingsStore] = None,
        router: Optional[RootRouter] = None,
        dev_mode: Optional[bool] = None,
    ):
        super().__init__()
        self.router = router or RootRouter()
        self.resolver = resolver or LocalSessionResolver()
        self.settings_store = settings or SettingsStore()
        self.dev_mode = is_dev_mode() if dev_mode is None else dev_mode
        self.dark_theme = False

        for stashify_theme in THEMES:
            self.register_theme(stashify_theme)

    @property
    def user(self):
        snapshot = self.router.snapshot
        return snapshot.user if snapshot else None

    @property
    def theme_tokens(self) -> dict[str, str]:
        return theme(self.dark_theme, self.settings_store.settings.high_contrast)

    def on_mount(self) -> None:
        """Called when app starts"""
        settings = self.settings_store.load()
        set_language(settings.language)
        self._apply_theme()

        self.push_screen(LoadingScreen())
        self.router.on_change(self._on_root_change)
        self.router.on_navigate(self._on_navigate)
        self.router.attach(self.resolver)
        self.run_worker(self.resolver.start(), exclusive=True, group="session")

    def on_unmount(self) -> None:
        self.router.detach()

    # ------------------------------------------------------------------
    # Root branch
    # ------------------------------------------------------------------

    def _branch_screen(self, state: RootState) -> Screen:
        if state is RootState.ONBOARDING:
            return OnboardingScreen()
        if state is RootState.LOGIN:
            return LoginScreen()
        if state is RootState.AUTHENTICATED:
            return MainScreen(self.router)
        return LoadingScreen()

    def _on_root_change(self, old: RootState, new: RootState) -> None:
        # Overlays are already cleared in the router; drop their screens first
        self._sync_overlays()
        if new is RootState.AUTHENTICATED and self.user is not None:
            set_language(self.user.language)
        self.switch_screen(self._branch_screen(new))

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def navigate(self, target: str, params: Optional[Mapping[str, Any]] = None) -> Optional[ResolvedRoute]:
        """Issue a navigation request from a screen.

        A rejected request is fatal in dev mode; otherwise it is logged and
        shown, and nothing changes.
        """
        try:
            return self.router.navigator.navigate(target, params)
        except ContractViolation as e:
            self._reject(e)
            return None

    def run_action_request(self, action: HeaderAction) -> Optional[ResolvedRoute]:
        try:
            return self.router.navigator.trigger(action)
        except ContractViolation as e:
            self._reject(e)
            return None

    def dismiss_overlay(self, route_name: str) -> None:
        if self.router.is_authenticated:
            self.router.navigator.dismiss(route_name)

    def _reject(self, error: ContractViolation) -> None:
        logger.error("Rejected navigation request: %s", error)
        if self.dev_mode:
            raise error
        self.notify(str(error), title="Can't open that", severity="error", timeout=5)

    def _on_navigate(self) -> None:
        self._sync_overlays()
        for screen in self.screen_stack:
            if isinstance(screen, MainScreen) and screen.is_mounted:
                screen.sync()

    def _sync_overlays(self) -> None:
        """Push/pop OverlayScreens until they match the overlay presenter"""
        wanted = list(self.router.overlays.mounted) if self.router.is_authenticated else []
        shown = [s for s in self.screen_stack if isinstance(s, OverlayScreen)]

        keep = 0
        while keep < len(wanted) and keep < len(shown) and shown[keep].overlay == wanted[keep]:
            keep += 1
        for _ in range(len(shown) - keep):
            self.pop_screen()
        for overlay in wanted[keep:]:
            self.push_screen(OverlayScreen(overlay))

    def action_select_tab(self, tab_name: str) -> None:
        """Switch tabs (F1-F5)"""
        if self.router.is_authenticated and not self.router.overlays.mounted:
            self.router.navigator.select_tab(Tab.from_name(tab_name))

    def action_back(self) -> None:
        if self.router.is_authenticated:
            self.router.navigator.back()

    # ------------------------------------------------------------------
    # Theme and language
    # ------------------------------------------------------------------

    def _apply_theme(self) -> None:
        self.theme = theme_name(self.dark_theme, self.settings_store.settings.high_contrast)

    def action_toggle_theme(self) -> None:
        """Toggle between dark and light mode (F12)"""
        self.dark_theme = not self.dark_theme
        self._apply_theme()
        self._on_navigate()

    async def toggle_language(self) -> None:
        language = "ta" if get_language() == "en" else "en"
        set_language(language)
        self.settings_store.update(language=language)
        try:
            await self.resolver.update_profile(language=language)
        except (OSError, StashifyError) as e:
            logger.warning("Could not store language on the profile: %s", e)
        if self.router.is_authenticated:
            # Rebuild the tree so every title and label is re-read
            self.switch_screen(MainScreen(self.router))


def main():
    """Entry point for Stashify"""
    # Textual owns the terminal, so log to a file
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(DATA_DIR / LOG_FILE),
        level=log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = StashifyApp()
    app.run()


if __name__ == "__main__":
    main()
