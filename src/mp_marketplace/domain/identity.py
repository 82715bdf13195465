"""Identity provider seam.

The catalog only reads a stable user id and a display name; credentials
and verification live elsewhere. SessionIdentityProvider is an in-process
stand-in for a real auth backend.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

IdentityListener = Callable[["Identity | None"], None]


@dataclass(frozen=True)
class Identity:
    id: str
    display_name: str | None = None
    email: str | None = None

    @property
    def seller_name(self) -> str:
        return self.display_name or self.email or self.id


class IdentityProviderProtocol(Protocol):
    def current_user(self) -> Identity | None: ...

    def on_change(self, callback: IdentityListener) -> Callable[[], None]: ...


class SessionIdentityProvider:
    def __init__(self, user: Identity | None = None) -> None:
        self._user = user
        self._listeners: list[IdentityListener] = []

    def current_user(self) -> Identity | None:
        return self._user

    def on_change(self, callback: IdentityListener) -> Callable[[], None]:
        """Subscribe; the callback fires immediately with the current user."""
        self._listeners.append(callback)
        callback(self._user)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def sign_in(self, user: Identity) -> None:
        self._user = user
        self._notify()

    def sign_out(self) -> None:
        self._user = None
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._user)
