"""
Synthetic test data generator.
Creates realistic users and posts and pushes them through the API.
"""
import random
from typing import List, Dict

# Names for generating users
FIRST_NAMES = [
    'Alice', 'Bob', 'Charlie', 'Diana', 'Eve', 'Frank', 'Grace', 'Henry',
    'Ivy', 'Jack', 'Karen', 'Leo', 'Mia', 'Nathan', 'Olivia', 'Peter',
]

LAST_NAMES = [
    'Smith', 'Johnson', 'Williams', 'Brown', 'Jones', 'Garcia', 'Miller', 'Davis',
]

TOPICS = ['Meetup', 'Announcement', 'Question', 'Giveaway', 'Feedback', 'News']


def generate_telegram_id() -> int:
    """Generate a realistic Telegram user id."""
    return random.randint(100_000_000, 7_999_999_999)


def generate_user(index: int, telegram_id: int = None, referred_by=None) -> Dict:
    """Generate a single user registration payload."""
    first_name = FIRST_NAMES[index % len(FIRST_NAMES)]
    last_name = LAST_NAMES[index % len(LAST_NAMES)]
    user = {
        'telegram_id': telegram_id or generate_telegram_id(),
        'first_name': first_name,
        'last_name': last_name,
        'username': f"{first_name.lower()}_{last_name.lower()}{index}",
        'photo_url': f"https://t.me/i/userpic/320/{first_name.lower()}{index}.jpg",
    }
    if referred_by is not None:
        user['referred_by'] = referred_by
    return user


def generate_post(index: int, author_id: int = None) -> Dict:
    """Generate a single post payload."""
    topic = TOPICS[index % len(TOPICS)]
    return {
        'title': f"{topic} #{index}",
        'content': f"{topic} details for post {index}.",
        'author_id': author_id,
    }


class DataBuilder:
    """Fluent builder: collect users and posts, then build() registers them in order."""

    def __init__(self, api):
        self.api = api
        self.users: List[Dict] = []
        self.posts: List[Dict] = []
        self.created_posts: List[Dict] = []

    def with_users(self, count: int) -> 'DataBuilder':
        for _ in range(count):
            self.users.append(generate_user(len(self.users)))
        return self

    def with_specific_user(self, **kwargs) -> 'DataBuilder':
        self.users.append(generate_user(len(self.users), **kwargs))
        return self

    def with_referred_users(self, referrer_id: int, count: int) -> 'DataBuilder':
        """Users that joined with the referrer's code."""
        for _ in range(count):
            self.with_specific_user(referred_by=f"ref_{referrer_id}")
        return self

    def with_posts(self, count: int, author_id: int = None) -> 'DataBuilder':
        for _ in range(count):
            self.posts.append(generate_post(len(self.posts), author_id))
        return self

    def build(self) -> 'DataBuilder':
        """Insert all data via the API; posts in list order, so the last one is newest."""
        for user in self.users:
            self.api.register_user(**user)
        for post in self.posts:
            self.created_posts.append(self.api.create_post(**post))
        return self

    def get_users(self) -> List[Dict]:
        return self.users
