"""
Referral - directed edge referrer -> referred, both Telegram ids.
A user can be referred only once; nobody refers themselves.
"""
import threading

from ..model import Database, Model
from ..utils import in_id_range, now_iso


class Referral(Model):
    __unique__ = ('referred_id',)

    referrer_id: int = 0
    referred_id: int = 0


def bonus_for(count: int, per_referral: int) -> int:
    return count * per_referral


class ReferralLedger:
    """In-memory referral edges."""

    def __init__(self):
        self._edges: list[Referral] = []
        self._lock = threading.Lock()

    def add(self, referrer_id: int, referred_id: int) -> Referral | None:
        """Records the edge, or returns None when it is a self-referral or a repeat."""
        if referrer_id == referred_id:
            return None
        with self._lock:
            if any(e.referred_id == referred_id for e in self._edges):
                return None
            edge = Referral({
                'id': len(self._edges) + 1,
                'referrer_id': referrer_id,
                'referred_id': referred_id,
                'created_at': now_iso(),
            })
            self._edges.append(edge)
            return edge.copy()

    def count(self, telegram_id: int) -> int:
        with self._lock:
            return sum(1 for e in self._edges if e.referrer_id == telegram_id)


class SqlReferralLedger:
    """Referral edges in the `referral` table."""

    def __init__(self, db: Database):
        self.db = db
        db.update_table(Referral)

    def add(self, referrer_id: int, referred_id: int) -> Referral | None:
        if referrer_id == referred_id:
            return None
        with self.db.lock:
            if self.db.count(Referral, 'referred_id = ?', [referred_id]):
                return None
            edge = Referral({'referrer_id': referrer_id, 'referred_id': referred_id, 'created_at': now_iso()})
            return self.db.insert(edge)

    def count(self, telegram_id: int) -> int:
        if not in_id_range(telegram_id):
            return 0
        return self.db.count(Referral, 'referrer_id = ?', [telegram_id])
