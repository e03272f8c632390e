from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_LOCK_COOLDOWN_HOURS
from ..core.exceptions import ResubmissionLockedError
from ..history.repository import HistoryRepository
from .model import RemainingTime


@dataclass(frozen=True)
class ActiveLock:
    group: str
    session_date: date
    locked_until: datetime
    remaining: RemainingTime

    def to_dict(self) -> dict:
        return {
            "group": self.group,
            "date": self.session_date.isoformat(),
            "locked_until": self.locked_until.isoformat(),
            "remaining": self.remaining.to_dict(),
        }


def remaining_between(now: datetime, until: datetime) -> RemainingTime:
    seconds = max(0, int((until - now).total_seconds()))
    return RemainingTime(hours=seconds // 3600, minutes=(seconds % 3600) // 60)


class ResubmissionGuard:
    """Cooldown lock per (owner, group, date).

    The lock is a derived predicate, recomputed from the persisted snapshots
    on every call; nothing is stored, so it expires on its own and is
    honored across reloads and devices. Check-then-write is not atomic: two
    near-simultaneous saves can both pass.
    """

    def __init__(self, history: HistoryRepository, *, cooldown: timedelta | None = None):
        self._history = history
        self._cooldown = cooldown if cooldown is not None else timedelta(hours=DEFAULT_LOCK_COOLDOWN_HOURS)

    @property
    def cooldown(self) -> timedelta:
        return self._cooldown

    def latest_created_at(self, owner_id: int, group: str, session_date: date) -> Optional[datetime]:
        group = group.strip()
        stamps = [
            s.created_at
            for s in self._history.list_by_owner(int(owner_id))
            if s.group.strip() == group and s.session_date == session_date
        ]
        return max(stamps) if stamps else None

    def _locked_until(self, owner_id: int, group: str, session_date: date, now: datetime) -> Optional[datetime]:
        created_at = self.latest_created_at(owner_id, group, session_date)
        if created_at is None:
            return None
        until = created_at + self._cooldown
        return until if now < until else None

    def is_locked(self, owner_id: int, group: str, session_date: date, *, now: datetime | None = None) -> bool:
        now = now or now_local()
        return self._locked_until(owner_id, group, session_date, now) is not None

    def remaining_time(
        self,
        owner_id: int,
        group: str,
        session_date: date,
        *,
        now: datetime | None = None,
    ) -> Optional[RemainingTime]:
        now = now or now_local()
        until = self._locked_until(owner_id, group, session_date, now)
        return remaining_between(now, until) if until else None

    def ensure_unlocked(self, owner_id: int, group: str, session_date: date, *, now: datetime | None = None) -> None:
        remaining = self.remaining_time(owner_id, group, session_date, now=now)
        if remaining is not None:
            raise ResubmissionLockedError(
                f"Attendance already saved. Try again in {remaining.hours} h {remaining.minutes} min.",
                remaining,
            )

    def active_locks(self, owner_id: int, *, now: datetime | None = None) -> list[ActiveLock]:
        now = now or now_local()
        latest: dict[tuple[str, date], datetime] = {}
        for s in self._history.list_by_owner(int(owner_id)):
            key = (s.group.strip(), s.session_date)
            if key not in latest or s.created_at > latest[key]:
                latest[key] = s.created_at

        out = []
        for (group, session_date), created_at in latest.items():
            until = created_at + self._cooldown
            if now < until:
                out.append(ActiveLock(group, session_date, until, remaining_between(now, until)))
        out.sort(key=lambda lock: lock.locked_until)
        return out
