"""
Player repository.

Handles database operations for :class:`PlayerRecord`.  Methods flush but
never commit; the caller owns the transaction.
"""

from typing import Optional

from sqlmodel import Session, select

from app.models.player import PlayerRecord


class PlayerRepository:
    """Repository for PlayerRecord database operations."""

    def __init__(self, session: Session):
        """
        Initialize repository with database session.

        Args:
            session: SQLModel database session
        """
        self.session = session

    def create(self, player: PlayerRecord) -> PlayerRecord:
        """
        Add a new player.

        Args:
            player: PlayerRecord instance to create

        Returns:
            The flushed player
        """
        self.session.add(player)
        self.session.flush()
        return player

    def get_by_id(self, player_id: str) -> Optional[PlayerRecord]:
        return self.session.get(PlayerRecord, player_id)

    def get_by_name_key(self, name_key: str) -> Optional[PlayerRecord]:
        """
        Get player by case-folded name.

        Args:
            name_key: Result of :func:`app.tracker.records.name_key`

        Returns:
            PlayerRecord if found, None otherwise
        """
        statement = select(PlayerRecord).where(PlayerRecord.name_key == name_key)
        return self.session.exec(statement).first()

    def get_all(self) -> list[PlayerRecord]:
        """All players ordered by name."""
        statement = select(PlayerRecord).order_by(PlayerRecord.name)
        return list(self.session.exec(statement).all())

    def get_all_ids(self) -> set[str]:
        return set(self.session.exec(select(PlayerRecord.id)).all())

    def delete(self, player: PlayerRecord) -> None:
        self.session.delete(player)
        self.session.flush()

    def delete_all(self) -> int:
        players = self.get_all()
        for player in players:
            self.session.delete(player)
        self.session.flush()
        return len(players)
