from flask import jsonify

from ..models.referral import bonus_for
from ..models.user import PROFILE_FIELDS
from ..stores import get_stores
from ..utils import json_body
from .log_routes import log


def register(app):
    # === User Routes ===

    @app.route('/api/users', methods=['POST'])
    def register_user():
        """Fetch-or-create: an already registered telegram_id comes back unchanged."""
        data = json_body()
        profile = {k: data.get(k) for k in PROFILE_FIELDS}
        user, created = get_stores().users.register(
            data.get('telegram_id'), referred_by=data.get('referred_by'), **profile
        )
        if created:
            log(f"User {user.telegram_id} registered" + (f", referred by {user.referred_by}" if user.referred_by else ''))
        else:
            log(f"User {user.telegram_id} already registered")
        return jsonify(user.to_dict())

    @app.route('/api/users/<int:telegram_id>', methods=['GET'])
    def get_user(telegram_id):
        return jsonify(get_stores().users.get(telegram_id).to_dict())

    @app.route('/api/users/<int:telegram_id>', methods=['PUT'])
    def update_user(telegram_id):
        data = json_body()
        user = get_stores().users.update(telegram_id, **{k: data.get(k) for k in PROFILE_FIELDS})
        log(f"User {telegram_id} profile updated")
        return jsonify(user.to_dict())

    @app.route('/api/users/<int:telegram_id>/referrals', methods=['GET'])
    def get_referrals(telegram_id):
        """Referral count from real edges; bonus is linear in the count."""
        count = get_stores().referrals.count(telegram_id)
        return jsonify({
            'referral_count': count,
            'bonus': bonus_for(count, app.config['REFERRAL_BONUS']),
        })
