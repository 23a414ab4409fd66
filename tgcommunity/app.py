"""
Telegram Community API - posts, users and referral bonuses for the mini-app.

    flask --app tgcommunity.app run          (factory)
    python -m tgcommunity.app                (PORT / STORAGE from the environment)
"""
import os
import traceback

from flask import Flask, send_from_directory
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from . import config
from .errors import AppError, InternalError, NotFound
from .routes import health_routes, log_routes, post_routes, user_routes
from .routes.log_routes import log
from .stores import open_stores, seed_demo_data
from .utils import err


def create_app(overrides: dict = None) -> Flask:
    app = Flask(__name__, static_folder='static')
    app.config.update(config.defaults())
    if overrides:
        app.config.update(overrides)
    # every route, preflight answered with 200 and no body
    CORS(app, send_wildcard=True)

    stores = open_stores(app.config['STORAGE'], app.config['DB_PATH'])
    app.extensions['stores'] = stores

    post_routes.register(app)
    user_routes.register(app)
    health_routes.register(app)
    log_routes.register(app)
    register_error_handlers(app)

    @app.route('/')
    def index(): return send_from_directory(app.static_folder, 'index.html')

    @app.route('/<path:filename>')
    def serve_static(filename):
        if filename.startswith('api/'):
            raise NotFound('Not found')
        if os.path.isfile(os.path.join(app.static_folder, filename)):
            return send_from_directory(app.static_folder, filename)
        return send_from_directory(app.static_folder, 'index.html')

    with app.app_context():
        seeded = app.config['SEED_DEMO_DATA'] and seed_demo_data(stores, app.config['ADMIN_ID'])
        log(f"Started with {app.config['STORAGE']} storage" + (', demo data seeded' if seeded else ''))
    return app


def register_error_handlers(app):
    @app.errorhandler(AppError)
    def handle_app_error(e: AppError):
        if isinstance(e, InternalError):
            log(f"Storage failure: {e.message}", 'ERROR')
            return err(InternalError.default_message, 500)
        return err(e.message, e.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return err(e.name, e.code)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        log(''.join(traceback.format_exception(e)).strip(), 'ERROR')
        return err(InternalError.default_message, 500)


def main():
    port = int(os.environ.get('PORT', config.DEFAULT_PORT))
    app = create_app({'STORAGE': os.environ.get('STORAGE', config.DEFAULT_STORAGE)})
    print(f"Server running on port {port}")
    print(f"Health check: http://localhost:{port}/health")
    print(f"Admin ID: {app.config['ADMIN_ID']}")
    app.run(host=config.DEFAULT_HOST, port=port)


if __name__ == '__main__': main()
