"""Classification of driver-level integrity errors.

SQLAlchemy wraps every driver exception in ``sqlalchemy.exc.IntegrityError``;
the wrapped error (``exc.orig``) carries a typed code that tells a
foreign-key violation apart from unique or not-null violations.
"""

from sqlalchemy.exc import IntegrityError

# PostgreSQL SQLSTATE for foreign_key_violation
PG_FOREIGN_KEY_VIOLATION = "23503"
# sqlite extended result code SQLITE_CONSTRAINT_FOREIGNKEY
SQLITE_CONSTRAINT_FOREIGNKEY = 787
# MySQL: ER_ROW_IS_REFERENCED_2, ER_NO_REFERENCED_ROW_2
MYSQL_FOREIGN_KEY_ERRNOS = {1451, 1452}


def _driver_error(exc: IntegrityError):
    orig = exc.orig
    # the asyncpg adapter keeps the native exception as the cause
    return orig, getattr(orig, "__cause__", None)


def is_foreign_key_violation(exc: BaseException) -> bool:
    """Return True when ``exc`` is an integrity error raised by a foreign key constraint."""
    if not isinstance(exc, IntegrityError):
        return False
    for err in _driver_error(exc):
        if err is None:
            continue
        sqlstate = getattr(err, "sqlstate", None) or getattr(err, "pgcode", None)
        if sqlstate == PG_FOREIGN_KEY_VIOLATION:
            return True
        if getattr(err, "sqlite_errorcode", None) == SQLITE_CONSTRAINT_FOREIGNKEY:
            return True
        args = getattr(err, "args", ())
        if args and isinstance(args[0], int) and args[0] in MYSQL_FOREIGN_KEY_ERRNOS:
            return True
    return False
