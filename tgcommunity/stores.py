"""
Backend selection. The Stores object lives in app.extensions['stores'];
handlers reach it through get_stores().
"""
from dataclasses import dataclass
from pathlib import Path

from flask import current_app

from .config import STORAGES
from .model import Database
from .models import (
    PostStore, SqlPostStore,
    UserDirectory, SqlUserDirectory,
    ReferralLedger, SqlReferralLedger,
)

WELCOME_POSTS = [
    ('Welcome to our community!',
     'We are glad to welcome you to our Telegram community. Here you will find news '
     'and people who share your interests.'),
    ('How the referral program works',
     'Invite your friends and get a bonus for every user who joins with your referral code!'),
]


@dataclass
class Stores:
    posts: PostStore | SqlPostStore
    users: UserDirectory | SqlUserDirectory
    referrals: ReferralLedger | SqlReferralLedger
    db: Database | None = None

    def close(self) -> None:
        if self.db:
            self.db.close()


def open_stores(storage: str, db_path: str | Path = None) -> Stores:
    if storage == 'memory':
        referrals = ReferralLedger()
        return Stores(PostStore(), UserDirectory(referrals), referrals)
    if storage == 'sqlite':
        db = Database(db_path)
        referrals = SqlReferralLedger(db)
        return Stores(SqlPostStore(db), SqlUserDirectory(db, referrals), referrals, db)
    raise ValueError(f"unknown storage {storage!r}, expected one of {STORAGES}")


def seed_demo_data(stores: Stores, admin_id: int) -> bool:
    """Admin user plus welcome posts, only into empty stores. Returns True if it seeded."""
    if stores.users.count() or stores.posts.count():
        return False
    stores.users.register(admin_id, first_name='Admin', last_name='User', username='admin')
    # oldest first so the first welcome post ends up on top
    for title, content in reversed(WELCOME_POSTS):
        stores.posts.create(title, content, admin_id)
    return True


def get_stores() -> Stores:
    return current_app.extensions['stores']
