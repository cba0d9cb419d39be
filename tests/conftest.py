"""Shared pytest fixtures for Chalktalk tests."""

from typing import Optional

import pytest

from chalktalk.core.enums import Role
from chalktalk.core.formations import create_player
from chalktalk.core.models import Play, Playbook, PlaybookLibrary, Player, new_id
from chalktalk.core.playbook import create_play
from chalktalk.session import EditorSession


# =============================================================================
# Store Fixtures
# =============================================================================


class MemoryStore:
    """In-memory stand-in for PlaybookStore that records every save."""

    def __init__(self, library: Optional[PlaybookLibrary] = None):
        self.library = library or PlaybookLibrary.single(Playbook.create("My Playbook"))
        self.saves = 0

    def load(self) -> PlaybookLibrary:
        return self.library

    def save(self, library: PlaybookLibrary) -> None:
        self.library = library
        self.saves += 1


@pytest.fixture
def memory_store() -> MemoryStore:
    """Store holding a single empty playbook."""
    return MemoryStore()


@pytest.fixture
def make_store():
    """Factory for memory stores seeded with a given library."""
    return MemoryStore


# =============================================================================
# Player Fixtures
# =============================================================================


@pytest.fixture
def wide_left() -> Player:
    """Receiver split wide on the left at (62.5, 525)."""
    return create_player(Role.WIDE_LEFT)


@pytest.fixture
def wide_right() -> Player:
    """Receiver split wide on the right at (562.5, 525)."""
    return create_player(Role.WIDE_RIGHT)


@pytest.fixture
def center() -> Player:
    """Center over the ball at (312.5, 525)."""
    return create_player(Role.CENTER)


# =============================================================================
# Play Fixtures
# =============================================================================


@pytest.fixture
def empty_play() -> Play:
    """A play with no players."""
    return Play(id=new_id(), name="Empty")


@pytest.fixture
def default_play() -> Play:
    """A play lined up in the default (right) formation: C, QB, L, R, SR."""
    _, play = create_play(Playbook.create("Fixture"), "Default")
    return play


@pytest.fixture
def trips_play(center, wide_left, wide_right) -> Play:
    """Center plus both wide receivers."""
    return Play(id=new_id(), name="Trips", players=(center, wide_left, wide_right))


# =============================================================================
# Playbook Fixtures
# =============================================================================


@pytest.fixture
def playbook_with_plays() -> Playbook:
    """Playbook holding three default-formation plays."""
    playbook = Playbook.create("Base Offense")
    for name in ("Spider 2 Y Banana", "Mesh", "Four Verts"):
        playbook, _ = create_play(playbook, name)
    return playbook


@pytest.fixture
def library(playbook_with_plays) -> PlaybookLibrary:
    """Library with a populated playbook and an empty second one."""
    return PlaybookLibrary(
        playbooks=(playbook_with_plays, Playbook.create("Red Zone")),
        current_playbook_id=playbook_with_plays.id,
    )


# =============================================================================
# Session Fixtures
# =============================================================================


@pytest.fixture
def session(library) -> EditorSession:
    """Session over the fixture library, backed by a memory store."""
    return EditorSession(library, store=MemoryStore(library))


@pytest.fixture
def editing_session(session) -> EditorSession:
    """Session with the first play open and its left receiver selected."""
    play = session.playbook.plays[0]
    session.select_play(play.id)
    session.select_player(play.players[2].id)
    return session

