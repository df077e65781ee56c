import logging
import os
import re
import tempfile
import threading
import time

from auth import require_admin
from errors import StorageFailure, ValidationFailure

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

_UNSAFE_CHARS = re.compile(r'[^a-zA-Z0-9_-]')
_UNSAFE_EXT_CHARS = re.compile(r'[^a-z0-9]')

_stamp_lock = threading.Lock()
_place_lock = threading.Lock()
_last_stamp = 0


def next_stamp():
    """Millisecond timestamp that never repeats within this process."""
    global _last_stamp
    with _stamp_lock:
        stamp = max(int(time.time() * 1000), _last_stamp + 1)
        _last_stamp = stamp
        return stamp


def derive_filename(original, stamp):
    # Drop any directory part, whichever separator the client used
    name = original.replace('\\', '/').rsplit('/', 1)[-1]
    stem, ext = os.path.splitext(name)
    ext = _UNSAFE_EXT_CHARS.sub('', ext.lower())
    stem = _UNSAFE_CHARS.sub('-', stem).lower()
    return '%s-%d%s' % (stem, stamp, '.' + ext if ext else '')


def describe_types(allowed_types):
    labels = [t.split('/', 1)[-1].upper() for t in allowed_types]
    if len(labels) == 1:
        return labels[0]
    return '%s or %s' % (', '.join(labels[:-1]), labels[-1])


def describe_size(max_bytes):
    if max_bytes % (1024 * 1024) == 0:
        return '%d MB' % (max_bytes // (1024 * 1024))
    return '%d bytes' % max_bytes


def _copy_limited(stream, dest, max_bytes):
    written = 0
    while True:
        chunk = stream.read(CHUNK_SIZE)
        if not chunk:
            return written
        written += len(chunk)
        if written > max_bytes:
            return written
        dest.write(chunk)


def _place(tmp_path, upload_dir, original):
    with _place_lock:
        filename = derive_filename(original, next_stamp())
        while os.path.exists(os.path.join(upload_dir, filename)):
            filename = derive_filename(original, next_stamp())
        os.replace(tmp_path, os.path.join(upload_dir, filename))
    return filename


def save_upload(ctx, file, upload_dir, staging_dir, url_prefix, max_bytes, allowed_types):
    """Validate one uploaded image and store it under a fresh name.

    Checks run in a fixed order and stop at the first failure: file present,
    MIME type allowed, size within ``max_bytes``. The body is staged in
    ``staging_dir``, which must not be publicly served and must sit on the
    same filesystem as ``upload_dir``. Nothing is left in either directory
    when a check fails. Returns the path relative to the
    display pages, e.g. ``img/fastfood/burger-1700000000000.png``.
    """
    require_admin(ctx)

    if file is None or not file.filename:
        raise ValidationFailure('no file received')
    if file.mimetype not in allowed_types:
        logger.info('Rejected upload %r with type %s', file.filename, file.mimetype)
        raise ValidationFailure('only %s images are allowed' % describe_types(allowed_types))

    tmp_path = None
    try:
        os.makedirs(upload_dir, exist_ok=True)
        os.makedirs(staging_dir, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=staging_dir, prefix='upload-', suffix='.part')
        with os.fdopen(fd, 'wb') as dest:
            size = _copy_limited(file.stream, dest, max_bytes)
            dest.flush()
            os.fsync(dest.fileno())
        if size > max_bytes:
            logger.info('Rejected upload %r: more than %d bytes', file.filename, max_bytes)
            raise ValidationFailure('file exceeds the %s limit' % describe_size(max_bytes))

        filename = _place(tmp_path, upload_dir, file.filename)
    except OSError:
        logger.exception('Could not store upload %r in %s', file.filename, upload_dir)
        raise StorageFailure('could not store the image')
    finally:
        if tmp_path and os.path.exists(tmp_path):
            os.remove(tmp_path)

    logger.info('Stored upload %r as %s', file.filename, filename)
    return '%s/%s' % (url_prefix.rstrip('/'), filename)

