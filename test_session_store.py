#!/usr/bin/env python3
"""
Tests for the client-side session store and its change notifications
"""
import pytest

from unigig.core.exceptions import AuthError, InvalidCredentials
from unigig.models.user import UserRole
from unigig.services.auth.session_store import AuthSessionStore, SessionEventType

PASSWORD = "secret-pass-1"


class Recorder:
    """Async listener that remembers every event it receives"""

    def __init__(self):
        self.events = []

    async def __call__(self, event):
        self.events.append(event)

    @property
    def types(self):
        return [e.type for e in self.events]


@pytest.fixture
def store(session_factory):
    return AuthSessionStore(session_factory)


async def test_each_transition_notifies_once(store):
    recorder = Recorder()
    store.subscribe(recorder)

    user = await store.sign_up("acme@example.com", PASSWORD, UserRole.employer, "Acme Labs")
    assert store.is_authenticated
    assert store.current_user == user
    assert recorder.types == [SessionEventType.SIGNED_IN]
    assert recorder.events[0].user.display_name == "Acme Labs"

    # Same principal signing in again is not a new transition
    await store.sign_in("acme@example.com", PASSWORD)
    assert recorder.types == [SessionEventType.SIGNED_IN]

    await store.sign_out()
    await store.sign_out()
    assert recorder.types == [SessionEventType.SIGNED_IN, SessionEventType.SIGNED_OUT]
    assert store.current_user is None
    assert store.token is None


async def test_switching_users_is_a_transition(store):
    await store.sign_up("acme@example.com", PASSWORD, UserRole.employer, "Acme Labs")
    recorder = Recorder()
    store.subscribe(recorder)

    student = await store.sign_up("sam@example.com", PASSWORD, UserRole.student, "Sam Student")

    assert recorder.types == [SessionEventType.SIGNED_IN]
    assert recorder.events[0].user == student


async def test_unsubscribe_stops_notifications(store):
    recorder = Recorder()
    unsubscribe = store.subscribe(recorder)
    unsubscribe()
    unsubscribe()

    await store.sign_up("sam@example.com", PASSWORD, UserRole.student, "Sam Student")
    assert recorder.events == []


async def test_failing_listener_does_not_block_others(store):
    async def broken(event):
        raise RuntimeError("listener bug")

    recorder = Recorder()
    store.subscribe(broken)
    store.subscribe(recorder)

    await store.sign_up("sam@example.com", PASSWORD, UserRole.student, "Sam Student")
    assert recorder.types == [SessionEventType.SIGNED_IN]
    assert store.is_authenticated


async def test_failed_sign_in_leaves_state_untouched(store):
    recorder = Recorder()
    store.subscribe(recorder)

    with pytest.raises(InvalidCredentials):
        await store.sign_in("nobody@example.com", PASSWORD)
    assert recorder.events == []
    assert not store.is_authenticated


async def test_restore_adopts_an_existing_token(store, session_factory):
    user = await store.sign_up("sam@example.com", PASSWORD, UserRole.student, "Sam Student")

    other = AuthSessionStore(session_factory)
    recorder = Recorder()
    other.subscribe(recorder)
    restored = await other.restore(store.token)

    assert restored == user
    assert other.token == store.token
    assert recorder.types == [SessionEventType.SIGNED_IN]


async def test_restore_after_sign_out_fails(store, session_factory):
    await store.sign_up("sam@example.com", PASSWORD, UserRole.student, "Sam Student")
    token = store.token
    await store.sign_out()

    with pytest.raises(AuthError):
        await AuthSessionStore(session_factory).restore(token)
