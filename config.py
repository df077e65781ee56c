import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()

basedir = os.path.abspath(os.path.dirname(__file__))

# --- Session ---
SECRET_KEY = os.environ.get('SESSION_SECRET', 'dev-secret-change-in-production')
SESSION_COOKIE_HTTPONLY = True
PERMANENT_SESSION_LIFETIME = timedelta(hours=8)
# Expiry counts from login; requests do not push it forward
SESSION_REFRESH_EACH_REQUEST = False

# --- Credentials ---
# No default for the admin pair: an unset value never matches.
ADMIN_USER = os.environ.get('ADMIN_USER')
ADMIN_PASS = os.environ.get('ADMIN_PASS')
DEMO_USER = os.environ.get('DEMO_USER', 'demo')
DEMO_PASS = os.environ.get('DEMO_PASS', 'demo')

# --- Files ---
PUBLIC_DIR = os.environ.get('PUBLIC_DIR', os.path.join(basedir, 'public'))
MENU_PATH = os.environ.get('MENU_PATH', os.path.join(basedir, 'data', 'menu.json'))
UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER', os.path.join(PUBLIC_DIR, 'demos', 'img', 'fastfood'))
# Relative to the pages under demos/, which is where the display reads it from
UPLOAD_URL_PREFIX = os.environ.get('UPLOAD_URL_PREFIX', 'img/fastfood')
# Partial uploads are written here, outside PUBLIC_DIR, then renamed into UPLOAD_FOLDER
UPLOAD_STAGING_FOLDER = os.environ.get('UPLOAD_STAGING_FOLDER', os.path.join(basedir, 'tmp', 'uploads'))
MAX_UPLOAD_BYTES = 5 * 1024 * 1024
ALLOWED_IMAGE_TYPES = ('image/jpeg', 'image/png', 'image/webp')

# --- Server ---
PORT = int(os.environ.get('PORT', 3000))
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
