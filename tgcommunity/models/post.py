"""
Post - a short text item shown in the community feed.
"""
import threading

from ..errors import NotFound, ValidationError
from ..model import Database, Model
from ..utils import is_blank, now_iso, parse_int


class Post(Model):
    title: str = ""
    content: str = ""
    author_id: int = None       # Telegram user id, not checked against the user directory

    @classmethod
    def new(cls, title, content, author_id=None) -> "Post":
        """Validated, not yet stored post."""
        if is_blank(title) or is_blank(content):
            raise ValidationError('Title and content are required')
        if author_id in (None, ''):
            author_id = None
        else:
            author_id = parse_int(author_id, 'author_id must be an integer')
        return cls({'title': title, 'content': content, 'author_id': author_id, 'created_at': now_iso()})


class PostStore:
    """
    In-memory posts. The list is kept newest first, ids come from a counter.
    """

    def __init__(self):
        self._posts: list[Post] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def list(self) -> list[Post]:
        with self._lock:
            return [p.copy() for p in self._posts]

    def create(self, title, content, author_id=None) -> Post:
        post = Post.new(title, content, author_id)
        with self._lock:
            post.id = self._next_id
            self._next_id += 1
            self._posts.insert(0, post)
            return post.copy()

    def get(self, id: int) -> Post:
        with self._lock:
            for p in self._posts:
                if p.id == id:
                    return p.copy()
        raise NotFound('Post not found')

    def delete(self, id: int) -> None:
        with self._lock:
            remaining = [p for p in self._posts if p.id != id]
            if len(remaining) == len(self._posts):
                raise NotFound('Post not found')
            self._posts = remaining

    def count(self) -> int:
        with self._lock:
            return len(self._posts)


class SqlPostStore:
    """Posts in the `post` table. Same contract as PostStore."""

    def __init__(self, db: Database):
        self.db = db
        db.update_table(Post)

    def list(self) -> list[Post]:
        return self.db.all(Post, order='id DESC')

    def create(self, title, content, author_id=None) -> Post:
        return self.db.insert(Post.new(title, content, author_id))

    def get(self, id: int) -> Post:
        post = self.db.by_id(Post, id)
        if not post:
            raise NotFound('Post not found')
        return post

    def delete(self, id: int) -> None:
        if not self.db.delete(Post, id):
            raise NotFound('Post not found')

    def count(self) -> int:
        return self.db.count(Post)
