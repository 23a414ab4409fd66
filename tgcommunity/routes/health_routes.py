from flask import jsonify

from ..utils import now_iso


def register(app):
    @app.route('/health')
    def health():
        return jsonify({
            'status': 'OK',
            'message': 'Telegram Community API is running',
            'timestamp': now_iso(),
            'environment': app.config['ENVIRONMENT'],
            'storage': app.config['STORAGE'],
        })
