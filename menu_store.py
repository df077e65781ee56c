"""File-backed storage for the menu document.

The whole menu lives in one JSON file. Reads hand back the stored bytes
untouched; writes replace the file in one ``os.replace`` so a reader sees
either the old document or the new one.
"""

import json
import logging
import os
import tempfile
import threading

from auth import require_admin
from errors import MenuConstraint, MenuValidationError, StorageFailure

logger = logging.getLogger(__name__)

MENU_ITEM_COUNT = 8

_write_lock = threading.Lock()


def read_menu_bytes(path):
    try:
        with open(path, 'rb') as f:
            data = f.read()
        json.loads(data)
    except (OSError, ValueError):
        logger.exception('Could not read menu from %s', path)
        raise StorageFailure('could not read the menu')
    return data


def validate_menu(document):
    if not isinstance(document, dict):
        document = {}

    items = document.get('items')
    if not isinstance(items, list) or len(items) != MENU_ITEM_COUNT:
        raise MenuValidationError(MenuConstraint.ITEM_COUNT,
                                  'menu must have exactly %d items' % MENU_ITEM_COUNT)
    if document.get('featured') is None:
        raise MenuValidationError(MenuConstraint.FEATURED_MISSING, 'invalid menu structure')
    if not isinstance(document.get('beverages'), list):
        raise MenuValidationError(MenuConstraint.BEVERAGES_INVALID, 'invalid menu structure')


def write_menu_file(path, document):
    payload = json.dumps(document, indent=2, ensure_ascii=False)
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(dir=directory, prefix='.menu-', suffix='.tmp')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def save_menu(ctx, document, path):
    require_admin(ctx)
    try:
        validate_menu(document)
    except MenuValidationError as e:
        logger.info('Rejected menu update (%s): %s', e.constraint.value, e.message)
        raise

    with _write_lock:
        try:
            write_menu_file(path, document)
        except OSError:
            logger.exception('Could not write menu to %s', path)
            raise StorageFailure('could not save the menu')
    logger.info('Menu saved to %s', path)
