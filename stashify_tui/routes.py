"""
Stashify: Route Registry and Typed Dispatch

Every navigable screen in the authenticated tree is a named route with a
fixed param shape and a presentation mode. All navigation requests pass
through RouteRegistry.resolve(), which is the only place params are checked.
Screens receive the validated params and never re-check them.

Usage:
    registry = build_default_registry()
    resolved = registry.resolve(NavigationRequest("MomentDetail", {"momentId": "m1"}))
    resolved.route.presentation   # Presentation.INLINE
    resolved.params               # {"momentId": "m1"}

    registry.resolve(NavigationRequest("MomentDetail", {}))  # ContractViolation
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Mapping, Optional

from .errors import ContractViolation, RegistryError


class Presentation(Enum):
    """How a route is shown. Only INLINE routes live in a stack."""
    INLINE = "inline"
    MODAL = "modal"
    FULL_SCREEN_MODAL = "fullScreenModal"


class Tab(Enum):
    """The 5 tabs of the authenticated tree, in tab-bar order"""
    HOME = "HomeTab"
    GAMES = "GamesTab"
    MOMENTS = "MomentsTab"
    FAMILY = "FamilyTab"
    PROFILE = "ProfileTab"

    @classmethod
    def from_name(cls, name: str) -> "Tab":
        for tab in cls:
            if tab.value == name:
                return tab
        raise ValueError(f"Unknown tab: {name!r}")


# Root route of each tab's stack
TAB_ROOTS = {
    Tab.HOME: "Home",
    Tab.GAMES: "Games",
    Tab.MOMENTS: "Moments",
    Tab.FAMILY: "Family",
    Tab.PROFILE: "Profile",
}

# Route that hosts the tab bar. Its optional "screen" param names a tab.
MAIN_TABS = "MainTabs"


@dataclass(frozen=True)
class Param:
    """One field of a route's param shape."""
    name: str
    type: type = str
    required: bool = True


@dataclass(frozen=True)
class RouteDefinition:
    """
    A registered route. Immutable once registered.

    tab is the owning domain for INLINE routes that are pushed onto a stack.
    screen names the widget that renders the route (defaults to the route
    name), so two routes may share one screen.
    """
    name: str
    params: tuple[Param, ...] = ()
    presentation: Presentation = Presentation.INLINE
    tab: Optional[Tab] = None
    screen: Optional[str] = None

    @property
    def is_overlay(self) -> bool:
        return self.presentation is not Presentation.INLINE

    @property
    def screen_name(self) -> str:
        return self.screen or self.name

    @property
    def required_params(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.params if p.required)


@dataclass(frozen=True)
class NavigationRequest:
    """A target route plus the params the caller wants to pass."""
    target: str
    params: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ResolvedRoute:
    """Result of a successful resolve: the route and its checked params."""
    route: RouteDefinition
    params: dict[str, Any]


class RouteRegistry:
    """
    Static table of route name -> RouteDefinition.

    Built once at startup. Registering the exact same definition twice is a
    no-op; registering a different definition under a taken name raises
    RegistryError.
    """

    def __init__(self):
        self._routes: dict[str, RouteDefinition] = {}

    def register(
        self,
        name: str,
        params: tuple[Param, ...] = (),
        presentation: Presentation = Presentation.INLINE,
        tab: Optional[Tab] = None,
        screen: Optional[str] = None,
    ) -> RouteDefinition:
        """Add a route to the table. Returns the stored definition."""
        definition = RouteDefinition(
            name=name,
            params=tuple(params),
            presentation=presentation,
            tab=tab,
            screen=screen,
        )
        existing = self._routes.get(name)
        if existing is not None:
            if existing == definition:
                return existing
            raise RegistryError(f"Route {name!r} is already registered")
        if definition.is_overlay and tab is not None:
            raise RegistryError(f"Overlay route {name!r} cannot belong to a tab")
        names = [p.name for p in definition.params]
        if len(set(names)) != len(names):
            raise RegistryError(f"Route {name!r} declares a param twice")
        self._routes[name] = definition
        return definition

    def get(self, name: str) -> RouteDefinition:
        """Look up a route. Unregistered names are a contract violation."""
        try:
            return self._routes[name]
        except KeyError:
            raise ContractViolation(name, "route is not registered") from None

    def resolve(self, request: NavigationRequest) -> ResolvedRoute:
        """Check a request against its target route.

        Raises ContractViolation for unknown routes, unknown params,
        missing required params, or params of the wrong type.
        """
        route = self.get(request.target)
        return ResolvedRoute(route=route, params=self.validate(route, request.params))

    def validate(self, route: RouteDefinition, params: Optional[Mapping[str, Any]]) -> dict[str, Any]:
        if params is None:
            params = {}
        if not isinstance(params, Mapping):
            raise ContractViolation(route.name, "params must be a mapping")

        allowed = {p.name: p for p in route.params}
        unknown = sorted(set(params) - set(allowed))
        if unknown:
            raise ContractViolation(route.name, f"unexpected params: {', '.join(unknown)}")

        checked: dict[str, Any] = {}
        for param in route.params:
            value = params.get(param.name)
            if value is None:
                # Optional params may be left out or passed as None
                if param.required:
                    raise ContractViolation(route.name, f"missing required param {param.name!r}")
                continue
            if not isinstance(value, param.type):
                raise ContractViolation(
                    route.name,
                    f"param {param.name!r} must be {param.type.__name__}, "
                    f"got {type(value).__name__}",
                )
            checked[param.name] = value
        return checked

    def __contains__(self, name: object) -> bool:
        return name in self._routes

    def __iter__(self) -> Iterator[RouteDefinition]:
        return iter(self._routes.values())

    def __len__(self) -> int:
        return len(self._routes)


# ============================================================================
# Default Route Table
# ============================================================================

def build_default_registry() -> RouteRegistry:
    """Build the route table for the authenticated tree."""
    registry = RouteRegistry()
    modal = Presentation.MODAL
    full_screen = Presentation.FULL_SCREEN_MODAL

    # Tab bar host and the root of each tab's stack
    registry.register(MAIN_TABS, (Param("screen", required=False),))
    for tab, root in TAB_ROOTS.items():
        registry.register(root, tab=tab)

    # Screens pushed inside a tab
    registry.register("MomentDetail", (Param("momentId"),), tab=Tab.MOMENTS)
    registry.register("PlayMoment", (Param("momentId"),), tab=Tab.MOMENTS)
    registry.register("CognitiveReport", tab=Tab.PROFILE)

    # Overlays
    registry.register("VoiceCompanion", presentation=modal)
    registry.register("MemoryGrid", presentation=full_screen)
    registry.register("WordChain", presentation=full_screen)
    registry.register("EchoChronicles", presentation=full_screen)
    registry.register("Riddles", presentation=full_screen)
    # Both quizzes currently render the memory grid screen
    registry.register("MemoryQuiz", presentation=full_screen, screen="MemoryGrid")
    registry.register("FamilyQuiz", presentation=full_screen, screen="MemoryGrid")
    registry.register("AddMoment", presentation=modal)
    registry.register("AddFamilyMember", presentation=modal)
    registry.register("FamilyMemberDetail", (Param("memberId"),), presentation=modal)
    registry.register("AddReminder", presentation=modal)
    registry.register("Leaderboard", (Param("gameType", required=False),), presentation=modal)

    return registry
