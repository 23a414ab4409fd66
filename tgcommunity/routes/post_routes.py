from flask import jsonify

from ..stores import get_stores
from ..utils import json_body
from .log_routes import log


def register(app):
    # === Post Routes ===

    @app.route('/api/posts', methods=['GET'])
    def get_posts():
        """All posts, newest first."""
        return jsonify([p.to_dict() for p in get_stores().posts.list()])

    @app.route('/api/posts', methods=['POST'])
    def create_post():
        data = json_body()
        post = get_stores().posts.create(data.get('title'), data.get('content'), data.get('author_id'))
        log(f"Post {post.id} created by {post.author_id}")
        return jsonify(post.to_dict())

    @app.route('/api/posts/<int:post_id>', methods=['GET'])
    def get_post(post_id):
        return jsonify(get_stores().posts.get(post_id).to_dict())

    @app.route('/api/posts/<int:post_id>', methods=['DELETE'])
    def delete_post(post_id):
        get_stores().posts.delete(post_id)
        log(f"Post {post_id} deleted")
        return jsonify({'success': True, 'message': 'Post deleted'})
