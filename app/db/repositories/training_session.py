"""
Training session repository.

Handles database operations for :class:`TrainingSessionRecord`.
"""

from sqlmodel import Session, select

from app.models.training_session import TrainingSessionRecord


class TrainingSessionRepository:
    """Repository for TrainingSessionRecord database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, entry: TrainingSessionRecord) -> TrainingSessionRecord:
        self.session.add(entry)
        self.session.flush()
        return entry

    def get_by_player(self, player_id: str) -> list[TrainingSessionRecord]:
        """Sessions of one player, newest first."""
        statement = (
            select(TrainingSessionRecord)
            .where(TrainingSessionRecord.player_id == player_id)
            .order_by(TrainingSessionRecord.date.desc(), TrainingSessionRecord.id.desc())
        )
        return list(self.session.exec(statement).all())

    def get_all_grouped(self) -> dict[str, list[TrainingSessionRecord]]:
        """All sessions keyed by player id, newest first within each player."""
        statement = select(TrainingSessionRecord).order_by(
            TrainingSessionRecord.date.desc(), TrainingSessionRecord.id.desc()
        )
        grouped: dict[str, list[TrainingSessionRecord]] = {}
        for entry in self.session.exec(statement).all():
            grouped.setdefault(entry.player_id, []).append(entry)
        return grouped

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def delete_by_player(self, player_id: str) -> int:
        entries = self.get_by_player(player_id)
        for entry in entries:
            self.session.delete(entry)
        self.session.flush()
        return len(entries)

    def delete_all(self) -> int:
        entries = list(self.session.exec(select(TrainingSessionRecord)).all())
        for entry in entries:
            self.session.delete(entry)
        self.session.flush()
        return len(entries)
