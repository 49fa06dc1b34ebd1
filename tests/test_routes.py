"""
Tests for the route registry and typed dispatch.

Pure logic tests, no widgets.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from stashify_tui.errors import ContractViolation, RegistryError
from stashify_tui.routes import (
    NavigationRequest,
    Param,
    Presentation,
    TAB_ROOTS,
    RouteRegistry,
    Tab,
    build_default_registry,
)


@pytest.fixture
def registry():
    return build_default_registry()


class TestRegister:
    """Building the route table."""

    def test_register_returns_definition(self):
        reg = RouteRegistry()
        route = reg.register("Detail", (Param("id"),), tab=Tab.HOME)
        assert route.name == "Detail"
        assert route.required_params == ("id",)
        assert "Detail" in reg

    def test_same_definition_twice_is_noop(self):
        reg = RouteRegistry()
        first = reg.register("Modal", presentation=Presentation.MODAL)
        second = reg.register("Modal", presentation=Presentation.MODAL)
        assert first is second
        assert len(reg) == 1

    def test_conflicting_duplicate_is_fatal(self):
        reg = RouteRegistry()
        reg.register("Modal", presentation=Presentation.MODAL)
        with pytest.raises(RegistryError):
            reg.register("Modal", presentation=Presentation.FULL_SCREEN_MODAL)

    def test_overlay_cannot_belong_to_tab(self):
        reg = RouteRegistry()
        with pytest.raises(RegistryError):
            reg.register("Bad", presentation=Presentation.MODAL, tab=Tab.HOME)

    def test_param_declared_twice_is_fatal(self):
        reg = RouteRegistry()
        with pytest.raises(RegistryError):
            reg.register("Bad", (Param("id"), Param("id")))


class TestResolve:
    """The single validation point for navigation requests."""

    def test_valid_request(self, registry):
        resolved = registry.resolve(NavigationRequest("MomentDetail", {"momentId": "m1"}))
        assert resolved.route.name == "MomentDetail"
        assert resolved.params == {"momentId": "m1"}

    def test_missing_required_param(self, registry):
        with pytest.raises(ContractViolation) as info:
            registry.resolve(NavigationRequest("MomentDetail", {}))
        assert info.value.route_name == "MomentDetail"
        assert "momentId" in info.value.reason

    def test_unregistered_route(self, registry):
        with pytest.raises(ContractViolation):
            registry.resolve(NavigationRequest("LetterLink"))

    def test_wrong_param_type(self, registry):
        with pytest.raises(ContractViolation):
            registry.resolve(NavigationRequest("FamilyMemberDetail", {"memberId": 42}))

    def test_unexpected_param(self, registry):
        with pytest.raises(ContractViolation):
            registry.resolve(NavigationRequest("AddMoment", {"momentId": "m1"}))

    def test_optional_param_may_be_omitted(self, registry):
        assert registry.resolve(NavigationRequest("Leaderboard")).params == {}

    def test_optional_param_none_is_dropped(self, registry):
        resolved = registry.resolve(NavigationRequest("Leaderboard", {"gameType": None}))
        assert resolved.params == {}

    def test_optional_param_kept(self, registry):
        resolved = registry.resolve(NavigationRequest("Leaderboard", {"gameType": "riddles"}))
        assert resolved.params == {"gameType": "riddles"}

    def test_params_must_be_mapping(self, registry):
        with pytest.raises(ContractViolation):
            registry.resolve(NavigationRequest("AddMoment", ["momentId"]))

    def test_resolved_params_are_a_copy(self, registry):
        params = {"momentId": "m1"}
        resolved = registry.resolve(NavigationRequest("MomentDetail", params))
        params["momentId"] = "changed"
        assert resolved.params == {"momentId": "m1"}


class TestDefaultTable:
    """The authenticated tree's route table."""

    def test_no_param_routes(self, registry):
        for name in ("MainTabs", "VoiceCompanion", "MemoryGrid", "WordChain",
                     "EchoChronicles", "Riddles", "MemoryQuiz", "FamilyQuiz",
                     "AddMoment", "AddFamilyMember", "AddReminder"):
            assert registry.get(name).required_params == (), name

    def test_id_routes(self, registry):
        assert registry.get("MomentDetail").required_params == ("momentId",)
        assert registry.get("PlayMoment").required_params == ("momentId",)
        assert registry.get("FamilyMemberDetail").required_params == ("memberId",)

    def test_games_are_full_screen(self, registry):
        for name in ("MemoryGrid", "WordChain", "EchoChronicles", "Riddles", "MemoryQuiz", "FamilyQuiz"):
            assert registry.get(name).presentation is Presentation.FULL_SCREEN_MODAL

    def test_voice_companion_is_modal(self, registry):
        assert registry.get("VoiceCompanion").presentation is Presentation.MODAL

    def test_quizzes_share_memory_grid_screen(self, registry):
        assert registry.get("MemoryQuiz").screen_name == "MemoryGrid"
        assert registry.get("FamilyQuiz").screen_name == "MemoryGrid"
        # Still separate routes
        assert registry.get("MemoryQuiz") != registry.get("FamilyQuiz")

    def test_every_tab_has_a_root(self, registry):
        for tab in Tab:
            root = registry.get(TAB_ROOTS[tab])
            assert root.tab is tab
            assert root.presentation is Presentation.INLINE

    def test_moment_routes_belong_to_moments(self, registry):
        assert registry.get("MomentDetail").tab is Tab.MOMENTS
        assert registry.get("PlayMoment").tab is Tab.MOMENTS


class TestTab:
    def test_from_name(self):
        assert Tab.from_name("GamesTab") is Tab.GAMES

    def test_from_unknown_name(self):
        with pytest.raises(ValueError):
            Tab.from_name("SettingsTab")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
