"""
Records and stores: each entity has an in-memory store and a SQLite store
with the same methods.
"""

from .post import Post, PostStore, SqlPostStore
from .user import User, UserDirectory, SqlUserDirectory
from .referral import Referral, ReferralLedger, SqlReferralLedger

__all__ = [
    'Post', 'PostStore', 'SqlPostStore',
    'User', 'UserDirectory', 'SqlUserDirectory',
    'Referral', 'ReferralLedger', 'SqlReferralLedger',
]
