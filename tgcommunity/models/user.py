"""
User - a Telegram profile registered through the mini-app.

Registration is fetch-or-create: a second register() with the same
telegram_id returns the stored record untouched. Profile fields change only
through update().
"""
import threading

from ..errors import NotFound, ValidationError
from ..model import Database, Model
from ..utils import now_iso, parse_int

PROFILE_FIELDS = ('first_name', 'last_name', 'username', 'photo_url')
PROFILE_DEFAULTS = {'first_name': 'User', 'last_name': '', 'username': '', 'photo_url': ''}


class User(Model):
    # id mirrors telegram_id so the SQLite primary key enforces uniqueness
    telegram_id: int = 0
    first_name: str = ""
    last_name: str = ""
    username: str = ""
    photo_url: str = ""
    referral_code: str = ""
    referred_by: int = None     # telegram_id of the inviting user
    updated_at: str = ""

    @staticmethod
    def referral_code_for(telegram_id: int) -> str:
        return f"ref_{telegram_id}"

    @classmethod
    def new(cls, telegram_id, **profile) -> "User":
        telegram_id = parse_telegram_id(telegram_id)
        data = {k: _text(profile.get(k)) or default for k, default in PROFILE_DEFAULTS.items()}
        data.update({
            'id': telegram_id,
            'telegram_id': telegram_id,
            'referral_code': cls.referral_code_for(telegram_id),
            'created_at': now_iso(),
        })
        return cls(data)


def parse_telegram_id(value) -> int:
    if value in (None, '', 0):
        raise ValidationError('Telegram ID is required')
    return parse_int(value, 'Telegram ID must be an integer')


def parse_referrer(value) -> int | None:
    """`ref_42`, `"42"` and `42` all mean user 42. Anything else is ignored."""
    if isinstance(value, str) and value.startswith('ref_'):
        value = value[len('ref_'):]
    try:
        return parse_int(value, '')
    except ValidationError:
        return None


def profile_changes(fields: dict) -> dict:
    changes = {k: _text(fields[k]) for k in PROFILE_FIELDS if fields.get(k) is not None}
    if not changes:
        raise ValidationError(f"Nothing to update, expected one of: {', '.join(PROFILE_FIELDS)}")
    return changes


def _text(value) -> str:
    return '' if value is None else str(value)


class UserDirectory:
    """In-memory users keyed by telegram_id."""

    def __init__(self, referrals):
        self.referrals = referrals
        self._users: dict[int, User] = {}
        self._lock = threading.Lock()

    def register(self, telegram_id, referred_by=None, **profile) -> tuple[User, bool]:
        """Returns (user, created)."""
        user = User.new(telegram_id, **profile)
        with self._lock:
            existing = self._users.get(user.telegram_id)
            if existing:
                return existing.copy(), False
            referrer = parse_referrer(referred_by)
            if referrer in self._users and self.referrals.add(referrer, user.telegram_id):
                user.referred_by = referrer
            self._users[user.telegram_id] = user
            return user.copy(), True

    def get(self, telegram_id: int) -> User:
        with self._lock:
            user = self._users.get(telegram_id)
            if not user:
                raise NotFound('User not found')
            return user.copy()

    def update(self, telegram_id: int, **fields) -> User:
        changes = profile_changes(fields)
        with self._lock:
            user = self._users.get(telegram_id)
            if not user:
                raise NotFound('User not found')
            for k, v in changes.items():
                setattr(user, k, v)
            user.updated_at = now_iso()
            return user.copy()

    def count(self) -> int:
        with self._lock:
            return len(self._users)


class SqlUserDirectory:
    """Users in the `user` table, primary key = telegram_id."""

    def __init__(self, db: Database, referrals):
        self.db = db
        self.referrals = referrals
        db.update_table(User)

    def register(self, telegram_id, referred_by=None, **profile) -> tuple[User, bool]:
        user = User.new(telegram_id, **profile)
        with self.db.lock:
            existing = self.db.by_id(User, user.telegram_id)
            if existing:
                return existing, False
            referrer = parse_referrer(referred_by)
            # edge and user commit together, a failed user insert leaves no edge
            with self.db.batch():
                if referrer is not None and self.db.by_id(User, referrer) \
                        and self.referrals.add(referrer, user.telegram_id):
                    user.referred_by = referrer
                self.db.insert(user)
            return user, True

    def get(self, telegram_id: int) -> User:
        user = self.db.by_id(User, telegram_id)
        if not user:
            raise NotFound('User not found')
        return user

    def update(self, telegram_id: int, **fields) -> User:
        changes = profile_changes(fields)
        with self.db.lock:
            user = self.get(telegram_id)
            for k, v in changes.items():
                setattr(user, k, v)
            user.updated_at = now_iso()
            self.db.update(user, list(changes) + ['updated_at'])
            return user

    def count(self) -> int:
        return self.db.count(User)
