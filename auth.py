import hmac
import logging

from errors import AuthenticationFailure, AuthorizationFailure

logger = logging.getLogger(__name__)

ADMIN_FLAG = 'authenticated'
DEMO_FLAG = 'demoAuthenticated'


class SessionContext:
    """Auth state of one request, backed by the cookie session.

    Protected operations take this as their first argument instead of
    reaching into ``flask.session`` themselves.
    """

    def __init__(self, store):
        self._store = store

    @classmethod
    def from_session(cls, session):
        return cls(session)

    @property
    def authenticated(self):
        return bool(self._store.get(ADMIN_FLAG, False))

    @property
    def demo_authenticated(self):
        return bool(self._store.get(DEMO_FLAG, False))

    def login_admin(self):
        self._mark(ADMIN_FLAG)

    def login_demo(self):
        self._mark(DEMO_FLAG)

    def logout(self):
        self._store.clear()

    def _mark(self, flag):
        # Permanent sessions expire after PERMANENT_SESSION_LIFETIME
        if hasattr(self._store, 'permanent'):
            self._store.permanent = True
        self._store[flag] = True


def require_admin(ctx):
    if not ctx.authenticated:
        raise AuthorizationFailure()


def check_credentials(username, password, expected_user, expected_pass):
    if not expected_user or not expected_pass:
        return False
    if not isinstance(username, str) or not isinstance(password, str):
        return False
    user_ok = hmac.compare_digest(username.encode('utf-8'), expected_user.encode('utf-8'))
    pass_ok = hmac.compare_digest(password.encode('utf-8'), expected_pass.encode('utf-8'))
    return user_ok and pass_ok


def admin_login(ctx, username, password, expected_user, expected_pass):
    if not check_credentials(username, password, expected_user, expected_pass):
        logger.warning('Admin login failed for %r', username)
        raise AuthenticationFailure('invalid username or password')
    ctx.login_admin()
    logger.info('Admin login for %r', username)


def demo_login(ctx, username, password, expected_user, expected_pass):
    if not check_credentials(username, password, expected_user, expected_pass):
        logger.warning('Demo login failed for %r', username)
        raise AuthenticationFailure('invalid credentials')
    ctx.login_demo()
    logger.info('Demo login for %r', username)
