"""
Tests for the root state machine: which branch a session value mounts,
and what survives a sign-out.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from stashify_tui.errors import ContractViolation, SessionResolutionFailure
from stashify_tui.navigation import RootRouter, RootState, branch_for
from stashify_tui.routes import Tab
from stashify_tui.session import SessionResolver, SessionSnapshot, User


USER = User(id="user_1", name="Meena", pin="1234")

LOADING = SessionSnapshot()
NOT_ONBOARDED = SessionSnapshot(is_loading=False)
SIGNED_OUT = SessionSnapshot(is_loading=False, is_onboarded=True)
SIGNED_IN = SessionSnapshot(is_loading=False, is_onboarded=True, user=USER)
FAILED = SessionSnapshot(is_loading=False, error=SessionResolutionFailure(OSError("disk")))


class FakeResolver(SessionResolver):
    """Resolver driven by hand from the test"""

    async def start(self):
        pass


class TestBranchFor:
    """Every session value maps to exactly one branch."""

    @pytest.mark.parametrize("snapshot,expected", [
        (LOADING, RootState.LOADING),
        (NOT_ONBOARDED, RootState.ONBOARDING),
        (SIGNED_OUT, RootState.LOGIN),
        (SIGNED_IN, RootState.AUTHENTICATED),
        (FAILED, RootState.LOGIN),
    ])
    def test_branch(self, snapshot, expected):
        assert branch_for(snapshot) is expected

    def test_loading_wins_over_everything(self):
        snapshot = SessionSnapshot(is_loading=True, is_onboarded=True, user=USER)
        assert branch_for(snapshot) is RootState.LOADING

    def test_user_without_onboarding_goes_to_onboarding(self):
        snapshot = SessionSnapshot(is_loading=False, is_onboarded=False, user=USER)
        assert branch_for(snapshot) is RootState.ONBOARDING


class TestRootRouter:

    def test_starts_loading(self):
        router = RootRouter()
        assert router.state is RootState.LOADING
        assert router.mounted() == ("Loading",)

    def test_stays_loading_until_first_value(self):
        router = RootRouter()
        resolver = FakeResolver()
        router.attach(resolver)
        assert router.state is RootState.LOADING

        resolver.publish(SIGNED_IN)
        assert router.state is RootState.AUTHENTICATED
        assert router.mounted() == ("MainTabs",)

    def test_attach_after_resolution_applies_immediately(self):
        resolver = FakeResolver()
        resolver.publish(SIGNED_OUT)
        router = RootRouter()
        router.attach(resolver)
        assert router.state is RootState.LOGIN

    def test_attach_twice_raises(self):
        router = RootRouter()
        router.attach(FakeResolver())
        with pytest.raises(RuntimeError):
            router.attach(FakeResolver())

    def test_detach_stops_updates(self):
        router = RootRouter()
        resolver = FakeResolver()
        router.attach(resolver)
        router.detach()
        resolver.publish(SIGNED_IN)
        assert router.state is RootState.LOADING

    def test_failed_resolution_mounts_login(self):
        router = RootRouter()
        resolver = FakeResolver()
        router.attach(resolver)
        resolver.fail(OSError("disk"))
        assert router.state is RootState.LOGIN
        assert isinstance(router.snapshot.error, SessionResolutionFailure)
        assert isinstance(router.snapshot.error.cause, OSError)

    def test_exactly_one_branch_mounted(self):
        router = RootRouter()
        for snapshot in (LOADING, NOT_ONBOARDED, SIGNED_OUT, SIGNED_IN, FAILED):
            router.apply(snapshot)
            mounted = router.mounted()
            branches = {"Loading", "Onboarding", "Login", "MainTabs"}
            assert len([name for name in mounted if name in branches]) == 1

    def test_change_listener_gets_old_and_new(self):
        router = RootRouter()
        changes = []
        router.on_change(lambda old, new: changes.append((old, new)))
        router.apply(NOT_ONBOARDED)
        router.apply(NOT_ONBOARDED)
        router.apply(SIGNED_IN)
        assert changes == [
            (RootState.LOADING, RootState.ONBOARDING),
            (RootState.ONBOARDING, RootState.AUTHENTICATED),
        ]

    def test_navigator_unavailable_outside_authenticated(self):
        router = RootRouter()
        router.apply(SIGNED_OUT)
        with pytest.raises(ContractViolation):
            router.navigator

    def test_overlays_listed_above_main_tabs(self):
        router = RootRouter()
        router.apply(SIGNED_IN)
        router.navigator.navigate("VoiceCompanion")
        router.navigator.navigate("Leaderboard")
        assert router.mounted() == ("MainTabs", "VoiceCompanion", "Leaderboard")


class TestSignOut:
    """Nothing from one signed-in session survives into the next."""

    def test_logout_resets_stacks_and_overlays(self):
        router = RootRouter()
        router.apply(SIGNED_IN)
        nav = router.navigator
        nav.navigate("MomentDetail", {"momentId": "m1"})
        nav.navigate("PlayMoment", {"momentId": "m1"})
        nav.navigate("CognitiveReport")
        nav.navigate("AddReminder")
        old_entries = [
            entry
            for stack in router.tabs.stacks.values()
            for entry in stack.entries
        ]

        router.apply(SIGNED_OUT)
        assert router.state is RootState.LOGIN
        assert router.mounted() == ("Login",)

        router.apply(SIGNED_IN)
        assert router.tabs.active_tab is Tab.HOME
        assert router.overlays.mounted == ()
        for stack in router.tabs.stacks.values():
            assert stack.depth == 1
            assert all(stack.visible is not entry for entry in old_entries)

    def test_session_failure_while_signed_in_resets(self):
        router = RootRouter()
        router.apply(SIGNED_IN)
        router.navigator.navigate("CognitiveReport")
        router.apply(FAILED)
        assert router.state is RootState.LOGIN
        assert router.tabs.stack(Tab.PROFILE).depth == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
