from flask import Flask, jsonify, request, session
from werkzeug.exceptions import RequestEntityTooLarge
import logging

import config
from auth import SessionContext, admin_login, demo_login
from errors import MenuBoardError
from menu_store import read_menu_bytes, save_menu
from uploads import describe_size, save_upload

# Everything under public/ is served from the site root (demos/, img/, ...)
app = Flask(__name__, static_folder=config.PUBLIC_DIR, static_url_path='')
app.config.from_object(config)

logger = logging.getLogger(__name__)


def configure_logging(level):
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s %(name)s: %(message)s')


configure_logging(app.config['LOG_LEVEL'])


# --- Helpers ---

def current_auth():
    return SessionContext.from_session(session)


def submitted_credentials():
    # JSON from the admin page, urlencoded from plain forms
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form
    return data.get('username'), data.get('password')


# --- Error handlers ---

@app.errorhandler(MenuBoardError)
def handle_menu_board_error(e):
    return jsonify(e.to_dict()), e.status_code


@app.errorhandler(RequestEntityTooLarge)
def handle_too_large(e):
    cap = app.config.get('MAX_CONTENT_LENGTH')
    what = 'file' if request.path == '/api/upload' else 'request body'
    if cap is None:
        return jsonify({'error': '%s is too large' % what}), 400
    return jsonify({'error': '%s exceeds the %s limit' % (what, describe_size(cap))}), 400


# --- Admin session ---

@app.route('/api/login', methods=['POST'])
def login():
    username, password = submitted_credentials()
    admin_login(current_auth(), username, password,
                app.config['ADMIN_USER'], app.config['ADMIN_PASS'])
    return jsonify({'ok': True})


@app.route('/api/logout', methods=['POST'])
def logout():
    current_auth().logout()
    logger.info('Session closed')
    return jsonify({'ok': True})


@app.route('/api/session')
def session_status():
    return jsonify({'authenticated': current_auth().authenticated})


# --- Demo session ---

@app.route('/api/demo-login', methods=['POST'])
def demo_login_view():
    username, password = submitted_credentials()
    demo_login(current_auth(), username, password,
               app.config['DEMO_USER'], app.config['DEMO_PASS'])
    return jsonify({'ok': True})


@app.route('/api/demo-session')
def demo_session_status():
    return jsonify({'authenticated': current_auth().demo_authenticated})


# --- Menu ---

@app.route('/api/menu', methods=['GET'])
def get_menu():
    # Public: the display page polls this
    data = read_menu_bytes(app.config['MENU_PATH'])
    return app.response_class(data, mimetype='application/json')


@app.route('/api/menu', methods=['POST'])
def update_menu():
    save_menu(current_auth(), request.get_json(silent=True), app.config['MENU_PATH'])
    return jsonify({'ok': True})


# --- Uploads ---

@app.route('/api/upload', methods=['POST'])
def upload_image():
    path = save_upload(current_auth(), request.files.get('image'),
                       app.config['UPLOAD_FOLDER'],
                       app.config['UPLOAD_STAGING_FOLDER'],
                       app.config['UPLOAD_URL_PREFIX'],
                       app.config['MAX_UPLOAD_BYTES'],
                       app.config['ALLOWED_IMAGE_TYPES'])
    return jsonify({'ok': True, 'path': path})


if __name__ == '__main__':
    port = app.config['PORT']
    app.logger.info('Server running on http://localhost:%d', port)
    app.logger.info('  Display: http://localhost:%d/demos/fastfood.html', port)
    app.logger.info('  Admin:   http://localhost:%d/demos/fastfood-admin.html', port)
    app.run(host='0.0.0.0', port=port)
