"""
Stashify: Session Resolver

Works out, asynchronously, whether the app is still loading, whether the
user has been onboarded, and who is signed in. The root router subscribes
once and re-evaluates on every change. Nothing here knows about screens.

The profile is stored as JSON in the data dir:
    {"user": {...}, "signed_in": true}

Signing out keeps the profile (so the next screen is Login, not Onboarding).
"""

import asyncio
import json
import logging
import time
from dataclasses import asdict, dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from .constants import DATA_DIR, PROFILE_FILE
from .errors import SessionResolutionFailure, StashifyError

logger = logging.getLogger(__name__)


class SessionStatus(Enum):
    LOADING = "loading"
    UNAUTHENTICATED = "unauthenticated"
    ONBOARDING_INCOMPLETE = "onboarding_incomplete"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True)
class User:
    id: str
    name: str
    pin: str
    date_of_birth: str = ""
    gender: str = ""
    language: str = "en"
    interests: tuple[str, ...] = ()
    created_at: str = ""

    def to_dict(self) -> dict:
        data = asdict(self)
        data["interests"] = list(self.interests)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            pin=str(data["pin"]),
            date_of_birth=data.get("date_of_birth", ""),
            gender=data.get("gender", ""),
            language=data.get("language", "en"),
            interests=tuple(data.get("interests", ())),
            created_at=data.get("created_at", ""),
        )


@dataclass
class OnboardingData:
    """What the onboarding flow collects"""
    name: str
    pin: str
    date_of_birth: str = ""
    gender: str = ""
    language: str = "en"
    interests: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SessionSnapshot:
    """
    One published session value.

    error is set when resolution failed; the router decides what that means.
    """
    is_loading: bool = True
    is_onboarded: bool = False
    user: Optional[User] = None
    error: Optional[SessionResolutionFailure] = None

    @property
    def status(self) -> SessionStatus:
        if self.is_loading:
            return SessionStatus.LOADING
        if not self.is_onboarded:
            return SessionStatus.ONBOARDING_INCOMPLETE
        if self.user is None:
            return SessionStatus.UNAUTHENTICATED
        return SessionStatus.AUTHENTICATED


SessionCallback = Callable[[SessionSnapshot], None]


class SessionResolver:
    """
    Base resolver: holds the current snapshot and pushes every change to
    subscribers. Subclasses implement start().
    """

    def __init__(self):
        self._snapshot = SessionSnapshot()
        self._subscribers: list[SessionCallback] = []
        self._resolved = False

    @property
    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    @property
    def resolved(self) -> bool:
        """Whether at least one result has been published"""
        return self._resolved

    def subscribe(self, callback: SessionCallback) -> Callable[[], None]:
        """Register for session changes. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, snapshot: SessionSnapshot) -> None:
        self._snapshot = snapshot
        self._resolved = True
        for callback in list(self._subscribers):
            callback(snapshot)

    def fail(self, cause: BaseException) -> None:
        """Publish a failed resolution."""
        logger.warning("Session resolution failed: %s", cause)
        self.publish(SessionSnapshot(is_loading=False, error=SessionResolutionFailure(cause)))

    async def start(self) -> None:
        raise NotImplementedError

    async def update_profile(self, **changes) -> User:
        raise NotImplementedError


class LocalSessionResolver(SessionResolver):
    """
    Resolves the session from a JSON profile on disk.

    Mirrors the on-device flow: onboarding creates the profile and signs in,
    login checks the PIN, logout signs out but keeps the profile.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        super().__init__()
        self.data_dir = Path(data_dir) if data_dir else DATA_DIR
        self._profile: Optional[User] = None
        self._signed_in = False

    @property
    def profile_path(self) -> Path:
        return self.data_dir / PROFILE_FILE

    async def start(self) -> None:
        """Load the stored profile and publish the first session."""
        try:
            stored = await asyncio.to_thread(self._read_profile)
        except (OSError, ValueError, KeyError, TypeError) as e:
            self.fail(e)
            return

        if stored is not None:
            self._profile, self._signed_in = stored
        self._publish_current()

    async def complete_onboarding(self, data: OnboardingData) -> User:
        """Create the profile and sign the new user in."""
        user = User(
            id=f"user_{int(time.time() * 1000)}",
            name=data.name,
            pin=data.pin,
            date_of_birth=data.date_of_birth,
            gender=data.gender,
            language=data.language,
            interests=tuple(data.interests),
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        # Onboarding must not look complete if the profile was not saved
        await asyncio.to_thread(self._write_profile, user, True)
        self._profile = user
        self._signed_in = True
        logger.info("Onboarding complete for %s", user.id)
        self._publish_current()
        return user

    async def login(self, pin: str) -> bool:
        """Sign in with a PIN. Returns False on a wrong PIN or no profile."""
        if self._profile is None or self._profile.pin != pin:
            logger.info("Login rejected")
            return False
        self._signed_in = True
        try:
            await asyncio.to_thread(self._write_profile, self._profile, True)
        except OSError as e:
            logger.warning("Could not remember sign-in: %s", e)
        self._publish_current()
        return True

    async def logout(self) -> None:
        """Sign out. The profile is kept so the next branch is Login."""
        self._signed_in = False
        if self._profile is not None:
            try:
                await asyncio.to_thread(self._write_profile, self._profile, False)
            except OSError as e:
                logger.warning("Could not persist sign-out: %s", e)
        self._publish_current()

    async def update_profile(self, **changes) -> User:
        """Change stored profile fields (e.g. language)."""
        if self._profile is None:
            raise StashifyError("No profile to update")
        updated = replace(self._profile, **changes)
        await asyncio.to_thread(self._write_profile, updated, self._signed_in)
        self._profile = updated
        self._publish_current()
        return updated

    def _publish_current(self) -> None:
        self.publish(SessionSnapshot(
            is_loading=False,
            is_onboarded=self._profile is not None,
            user=self._profile if self._signed_in else None,
        ))

    def _read_profile(self) -> Optional[tuple[User, bool]]:
        path = self.profile_path
        if not path.exists():
            return None
        data = json.loads(path.read_text(encoding="utf-8"))
        return User.from_dict(data["user"]), bool(data.get("signed_in", False))

    def _write_profile(self, user: User, signed_in: bool) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        payload = {"user": user.to_dict(), "signed_in": signed_in}
        self.profile_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
