from flask import current_app, has_app_context, jsonify
import os
from datetime import datetime


def log(msg: str, level: str = 'INFO'):
    """Append a log entry to the configured LOG_FILE (no-op outside an app or without one)."""
    if not has_app_context():
        return
    log_file = current_app.config.get('LOG_FILE')
    if not log_file:
        return
    timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
    line = f"[{timestamp}] [{level}] {msg}\n"
    os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
    with open(log_file, 'a', encoding='utf-8') as f:
        f.write(line)


def register(app):
    @app.route('/api/logs')
    def get_logs():
        """Return logs as array of lines, newest first."""
        log_file = app.config.get('LOG_FILE')
        if not log_file or not os.path.exists(log_file):
            return jsonify([])
        with open(log_file, 'r', encoding='utf-8') as f:
            lines = f.readlines()
        lines = [l.rstrip('\n') for l in lines if l.strip()]
        lines.reverse()
        return jsonify(lines)

    @app.route('/api/logs/clear', methods=['POST'])
    def clear_logs():
        """Clear the logs file."""
        log_file = app.config.get('LOG_FILE')
        if log_file and os.path.exists(log_file):
            os.remove(log_file)
        log('Logs cleared', 'INFO')
        return jsonify({'status': 'ok'})
