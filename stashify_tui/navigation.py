"""
Stashify: Navigation State

Pure routing state with no I/O and no widgets, so it can be tested directly:
- FeatureStack: one push/pop history per tab (Home, Games, Moments, Family, Profile)
- TabRouter: the 5 stacks plus which tab is active
- OverlayPresenter: modal and full-screen routes mounted above the tabs
- Navigator: typed dispatch, the single entry point for navigation requests
- RootRouter: Loading / Onboarding / Login / Authenticated state machine

Control flows down (session -> root -> tab -> stack top). Navigation requests
flow up through Navigator.dispatch(), which resolves them against the route
registry before anything is mutated.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from .constants import ICON_MIC, ICON_PLUS
from .errors import ContractViolation
from .routes import (
    MAIN_TABS,
    TAB_ROOTS,
    NavigationRequest,
    ResolvedRoute,
    RouteDefinition,
    RouteRegistry,
    Tab,
    build_default_registry,
)
from .session import SessionResolver, SessionSnapshot, SessionStatus

logger = logging.getLogger(__name__)


# ============================================================================
# Stack Entries and Header Actions
# ============================================================================

@dataclass(frozen=True)
class StackEntry:
    """One screen in a stack. pushed_at only ever grows within a stack."""
    route_name: str
    params: Mapping[str, Any]
    pushed_at: int


@dataclass(frozen=True)
class HeaderAction:
    """
    A header button declared by a tab: where it goes, not what it does.

    param_builder (if any) is called at press time to build the params.
    """
    icon: str
    label_key: str
    target: str
    param_builder: Optional[Callable[[], Mapping[str, Any]]] = None

    def request(self) -> NavigationRequest:
        params = self.param_builder() if self.param_builder else {}
        return NavigationRequest(self.target, params)


HEADER_ACTIONS: dict[Tab, tuple[HeaderAction, ...]] = {
    Tab.HOME: (HeaderAction(ICON_MIC, "companion.talk", "VoiceCompanion"),),
    Tab.MOMENTS: (HeaderAction(ICON_PLUS, "moments.add", "AddMoment"),),
    Tab.FAMILY: (HeaderAction(ICON_PLUS, "familyTree.add", "AddFamilyMember"),),
}


# ============================================================================
# Feature Stack
# ============================================================================

class FeatureStack:
    """
    Ordered screen history for one tab. The last entry is visible.

    Always holds at least the root entry. Only INLINE routes owned by this
    tab can be pushed.
    """

    def __init__(
        self,
        tab: Tab,
        registry: RouteRegistry,
        header_actions: tuple[HeaderAction, ...] = (),
    ):
        self.tab = tab
        self.root_route = TAB_ROOTS[tab]
        self.header_actions = header_actions
        self._registry = registry
        self._ordinal = 0
        self._entries: list[StackEntry] = [self._new_entry(self.root_route, {})]

    def _new_entry(self, route_name: str, params: Mapping[str, Any]) -> StackEntry:
        self._ordinal += 1
        return StackEntry(route_name, dict(params), self._ordinal)

    @property
    def entries(self) -> tuple[StackEntry, ...]:
        return tuple(self._entries)

    @property
    def depth(self) -> int:
        return len(self._entries)

    @property
    def visible(self) -> StackEntry:
        return self._entries[-1]

    @property
    def root(self) -> StackEntry:
        return self._entries[0]

    def push(self, route_name: str, params: Optional[Mapping[str, Any]] = None) -> StackEntry:
        """Validate and append. Raises ContractViolation without mutating."""
        route = self._registry.get(route_name)
        if route.is_overlay:
            raise ContractViolation(route_name, "overlay routes are presented, not pushed")
        if route.tab is not self.tab:
            raise ContractViolation(route_name, f"route does not belong to {self.tab.value}")
        if route_name == self.root_route:
            raise ContractViolation(route_name, "the root route is already at the bottom of the stack")
        checked = self._registry.validate(route, params)

        entry = self._new_entry(route_name, checked)
        self._entries.append(entry)
        return entry

    def pop(self) -> Optional[StackEntry]:
        """Remove the top entry. At the root this is a no-op returning None."""
        if len(self._entries) == 1:
            return None
        return self._entries.pop()

    def pop_to_root(self) -> None:
        del self._entries[1:]

    def reset(self) -> None:
        """Drop everything and start again from a fresh root entry."""
        self._entries = [self._new_entry(self.root_route, {})]


# ============================================================================
# Tab Router
# ============================================================================

class TabRouter:
    """
    The 5 feature stacks and the active tab selector.

    Switching tabs never touches any stack.
    """

    def __init__(self, registry: RouteRegistry, initial_tab: Tab = Tab.HOME):
        self.initial_tab = initial_tab
        self.active_tab = initial_tab
        self.stacks: dict[Tab, FeatureStack] = {
            tab: FeatureStack(tab, registry, HEADER_ACTIONS.get(tab, ()))
            for tab in Tab
        }

    def select_tab(self, tab: Tab) -> None:
        self.active_tab = tab

    def stack(self, tab: Tab) -> FeatureStack:
        return self.stacks[tab]

    @property
    def active_stack(self) -> FeatureStack:
        return self.stacks[self.active_tab]

    def visible_screen(self) -> StackEntry:
        return self.active_stack.visible

    def reset(self) -> None:
        for stack in self.stacks.values():
            stack.reset()
        self.active_tab = self.initial_tab


# ============================================================================
# Overlay Presenter
# ============================================================================

@dataclass(frozen=True)
class Overlay:
    route: RouteDefinition
    params: Mapping[str, Any]

    @property
    def route_name(self) -> str:
        return self.route.name


class OverlayPresenter:
    """
    Modal and full-screen routes mounted above the tabs, in mount order.

    A route is mounted at most once. Presenting a mounted route again brings
    it to the top with the new params.
    """

    def __init__(self, registry: RouteRegistry):
        self._registry = registry
        self._mounted: list[Overlay] = []

    @property
    def mounted(self) -> tuple[Overlay, ...]:
        return tuple(self._mounted)

    @property
    def top(self) -> Optional[Overlay]:
        return self._mounted[-1] if self._mounted else None

    def is_presented(self, route_name: str) -> bool:
        return any(o.route_name == route_name for o in self._mounted)

    def present(self, route_name: str, params: Optional[Mapping[str, Any]] = None) -> Overlay:
        route = self._registry.get(route_name)
        if not route.is_overlay:
            raise ContractViolation(route_name, "inline routes are pushed, not presented")
        overlay = Overlay(route, self._registry.validate(route, params))

        self._mounted = [o for o in self._mounted if o.route_name != route_name]
        self._mounted.append(overlay)
        return overlay

    def dismiss(self, route_name: str) -> bool:
        """Unmount a route. Returns False if it was not mounted."""
        remaining = [o for o in self._mounted if o.route_name != route_name]
        dismissed = len(remaining) != len(self._mounted)
        self._mounted = remaining
        return dismissed

    def clear(self) -> None:
        self._mounted = []


# ============================================================================
# Navigator (typed dispatch)
# ============================================================================

class Navigator:
    """
    Resolves navigation requests and applies them to whichever router owns
    the target route:
    - MainTabs (optional "screen" tab name): switch tab
    - a tab's root route: switch to that tab and pop back to its root
    - an INLINE route: switch to its owning tab and push
    - a MODAL / FULL_SCREEN_MODAL route: present as an overlay

    Every method is synchronous and either applies fully or raises
    ContractViolation having changed nothing.
    """

    def __init__(self, registry: RouteRegistry, tabs: TabRouter, overlays: OverlayPresenter):
        self.registry = registry
        self.tabs = tabs
        self.overlays = overlays
        self._listeners: list[Callable[[], None]] = []

    def on_change(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def _changed(self) -> None:
        for callback in list(self._listeners):
            callback()

    def navigate(self, target: str, params: Optional[Mapping[str, Any]] = None) -> ResolvedRoute:
        return self.dispatch(NavigationRequest(target, params or {}))

    def dispatch(self, request: NavigationRequest) -> ResolvedRoute:
        resolved = self.registry.resolve(request)
        route, params = resolved.route, resolved.params

        if route.is_overlay:
            self.overlays.present(route.name, params)
        elif route.name == MAIN_TABS:
            if "screen" in params:
                try:
                    tab = Tab.from_name(params["screen"])
                except ValueError:
                    raise ContractViolation(route.name, f"unknown tab {params['screen']!r}") from None
                self.tabs.select_tab(tab)
        elif route.tab is None:
            raise ContractViolation(route.name, "inline route has no owning tab")
        elif route.name == TAB_ROOTS[route.tab]:
            self.tabs.select_tab(route.tab)
            self.tabs.active_stack.pop_to_root()
        else:
            stack = self.tabs.stack(route.tab)
            stack.push(route.name, params)
            self.tabs.select_tab(route.tab)

        logger.debug("Navigated to %s %s", route.name, params)
        self._changed()
        return resolved

    def trigger(self, action: HeaderAction) -> ResolvedRoute:
        """Run a header action through the same dispatch as everything else."""
        return self.dispatch(action.request())

    def push(self, route_name: str, params: Optional[Mapping[str, Any]] = None) -> StackEntry:
        """Push onto the active tab's stack."""
        entry = self.tabs.active_stack.push(route_name, params)
        self._changed()
        return entry

    def pop(self) -> Optional[StackEntry]:
        entry = self.tabs.active_stack.pop()
        if entry is not None:
            self._changed()
        return entry

    def present(self, route_name: str, params: Optional[Mapping[str, Any]] = None) -> Overlay:
        overlay = self.overlays.present(route_name, params)
        self._changed()
        return overlay

    def dismiss(self, route_name: str) -> bool:
        dismissed = self.overlays.dismiss(route_name)
        if dismissed:
            self._changed()
        return dismissed

    def select_tab(self, tab: Tab) -> None:
        if tab is not self.tabs.active_tab:
            self.tabs.select_tab(tab)
            self._changed()

    def back(self) -> bool:
        """Dismiss the top overlay, or else pop the active stack.

        Returns False when there was nothing to go back from.
        """
        top = self.overlays.top
        if top is not None:
            return self.dismiss(top.route_name)
        return self.pop() is not None


# ============================================================================
# Root Router (state machine)
# ============================================================================

class RootState(Enum):
    """The 4 top-level branches. Exactly one is mounted at a time."""
    LOADING = "loading"
    ONBOARDING = "onboarding"
    LOGIN = "login"
    AUTHENTICATED = "authenticated"


# Total: every session status maps to exactly one branch
BRANCH_FOR_STATUS = {
    SessionStatus.LOADING: RootState.LOADING,
    SessionStatus.ONBOARDING_INCOMPLETE: RootState.ONBOARDING,
    SessionStatus.UNAUTHENTICATED: RootState.LOGIN,
    SessionStatus.AUTHENTICATED: RootState.AUTHENTICATED,
}


def branch_for(snapshot: SessionSnapshot) -> RootState:
    """Pure transition function: which branch a session value mounts.

    A failed resolution forces Login rather than retrying.
    """
    if snapshot.is_loading:
        return RootState.LOADING
    if snapshot.error is not None:
        return RootState.LOGIN
    return BRANCH_FOR_STATUS[snapshot.status]


StateCallback = Callable[[RootState, RootState], None]


class RootRouter:
    """
    Top-level state machine. Starts in LOADING and stays there until the
    session resolver publishes its first value.

    Leaving AUTHENTICATED (sign-out) resets every stack and clears every
    overlay, so nothing from one signed-in session survives into the next.
    """

    def __init__(self, registry: Optional[RouteRegistry] = None):
        self.registry = registry or build_default_registry()
        self.state = RootState.LOADING
        self.snapshot: Optional[SessionSnapshot] = None
        self.tabs = TabRouter(self.registry)
        self.overlays = OverlayPresenter(self.registry)
        self._navigator = Navigator(self.registry, self.tabs, self.overlays)
        self._listeners: list[StateCallback] = []
        self._unsubscribe: Optional[Callable[[], None]] = None

    def attach(self, resolver: SessionResolver) -> None:
        """Subscribe to a session resolver (once)."""
        if self._unsubscribe is not None:
            raise RuntimeError("RootRouter is already attached to a session resolver")
        self._unsubscribe = resolver.subscribe(self.apply)
        if resolver.resolved:
            self.apply(resolver.snapshot)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def on_change(self, callback: StateCallback) -> None:
        self._listeners.append(callback)

    def on_navigate(self, callback: Callable[[], None]) -> None:
        """Called after any change to tabs, stacks or overlays."""
        self._navigator.on_change(callback)

    def apply(self, snapshot: SessionSnapshot) -> RootState:
        """Re-evaluate the branch for a new session value."""
        self.snapshot = snapshot
        new_state = branch_for(snapshot)
        old_state = self.state
        if new_state is old_state:
            return new_state

        if old_state is RootState.AUTHENTICATED:
            self.tabs.reset()
            self.overlays.clear()
        self.state = new_state
        logger.info("Root branch %s -> %s", old_state.value, new_state.value)

        for callback in list(self._listeners):
            callback(old_state, new_state)
        return new_state

    @property
    def is_authenticated(self) -> bool:
        return self.state is RootState.AUTHENTICATED

    @property
    def navigator(self) -> Navigator:
        """Navigation is only available inside the authenticated tree."""
        if not self.is_authenticated:
            raise ContractViolation(MAIN_TABS, f"not available while {self.state.value}")
        return self._navigator

    def mounted(self) -> tuple[str, ...]:
        """Names of what is mounted at the top level, bottom to top."""
        if self.state is RootState.LOADING:
            return ("Loading",)
        if self.state is RootState.ONBOARDING:
            return ("Onboarding",)
        if self.state is RootState.LOGIN:
            return ("Login",)
        return (MAIN_TABS,) + tuple(o.route_name for o in self.overlays.mounted)
