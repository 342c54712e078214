"""
Record helpers shared by both stores.

Validation of incoming sessions, player naming rules and id generation
live here so that the SQL and JSON backends apply exactly the same rules.
"""

import random
import time
from collections.abc import Container, Iterator, Mapping
from typing import Any, Optional

from pydantic import ValidationError

from app.core.clock import utcnow
from app.core.exceptions import InvalidInput, InvalidSession
from app.schemas.dataset import DEFAULT_VERSION, Dataset, DatasetReplace
from app.schemas.player import MAX_NAME_LENGTH, Player
from app.schemas.session import Session


def name_key(name: str) -> str:
    """Case-insensitive identity of a player name."""
    return name.strip().casefold()


def clean_name(name: Any) -> str:
    """Return the stripped name or raise :class:`InvalidInput`.

    Names longer than :data:`MAX_NAME_LENGTH` are rejected, the same limit
    the request schemas apply.
    """
    if not isinstance(name, str) or not name.strip():
        raise InvalidInput("Name required")
    name = name.strip()
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidInput(f"Name longer than {MAX_NAME_LENGTH} characters")
    return name


def new_player_id(taken: Container[str] = ()) -> str:
    """Generate ``player_<epoch ms>``; a random suffix is added on collision."""
    player_id = f"player_{int(time.time() * 1000)}"
    while player_id in taken:
        player_id = f"player_{int(time.time() * 1000)}_{random.randint(0, 999)}"
    return player_id


def build_session(
    date: Any, duration: Any, rpe: Any, notes: Optional[str] = "",
) -> Session:
    """Validate raw session fields and return a :class:`Session`.

    Raises:
        InvalidSession: if ``date`` is missing or malformed, ``duration`` is
            not a positive integer or ``rpe`` is outside 1-10.
    """
    try:
        return Session.model_validate({"date": date, "duration": duration, "rpe": rpe, "notes": notes})
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        raise InvalidSession(f"Invalid session data: {', '.join(fields) or 'session'}") from e


def coerce_session(raw: Any) -> Optional[Session]:
    """Lenient variant of :func:`build_session` used by imports.

    Returns ``None`` instead of raising for anything that would not be a
    valid session.
    """
    if not isinstance(raw, Mapping):
        return None
    try:
        return build_session(raw.get("date"), raw.get("duration"), raw.get("rpe"), raw.get("notes"))
    except InvalidSession:
        return None


def iter_import_entries(incoming: Any) -> Iterator[tuple[str, list[Session]]]:
    """Yield ``(name, valid_sessions)`` for every usable import entry.

    Entries that are not objects or have no name are skipped silently, as are
    sessions missing a date, duration or RPE.
    """
    for entry in incoming or ():
        if not isinstance(entry, Mapping):
            continue
        try:
            name = clean_name(entry.get("name"))
        except InvalidInput:
            continue
        raw_sessions = entry.get("sessions")
        if not isinstance(raw_sessions, list):
            raw_sessions = []
        sessions = [s for s in (coerce_session(raw) for raw in raw_sessions) if s is not None]
        yield name, sessions


def normalize_dataset(payload: DatasetReplace) -> Dataset:
    """Turn a ``PUT /data`` body into a :class:`Dataset` ready to be written.

    Missing ids are generated and loads recomputed.

    Raises:
        InvalidInput: on duplicate ids or case-insensitively duplicate names.
    """
    players: list[Player] = []
    seen_ids: set[str] = {p.id for p in payload.players if p.id}
    assigned_ids: set[str] = set()
    seen_names: set[str] = set()

    for entry in payload.players:
        key = name_key(entry.name)
        if key in seen_names:
            raise InvalidInput(f"Duplicate player name: {entry.name}")
        seen_names.add(key)

        player_id = entry.id
        if player_id is None:
            player_id = new_player_id(seen_ids | assigned_ids)
        elif player_id in assigned_ids:
            raise InvalidInput(f"Duplicate player id: {player_id}")
        assigned_ids.add(player_id)

        sessions = [Session.model_validate(s.model_dump()) for s in entry.sessions]
        players.append(Player(id=player_id, name=entry.name, sessions=sessions))

    return Dataset(players=players, version=payload.version or DEFAULT_VERSION, updated_at=utcnow())