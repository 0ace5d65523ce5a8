from __future__ import annotations

import mysql.connector

from ..core.exceptions import StoreTimeout, StoreUnavailable

# CR_CONN_HOST_ERROR, CR_SERVER_LOST, ER_QUERY_TIMEOUT, ER_LOCK_WAIT_TIMEOUT
_TIMEOUT_ERRNOS = {2003, 2013, 3024, 1205}


def translate_mysql_error(error: mysql.connector.Error) -> StoreUnavailable:
    """Map a connector error onto the store failure surfaced to callers."""

    errno = getattr(error, "errno", None)
    text = str(error)
    if errno in _TIMEOUT_ERRNOS and (errno != 2003 or "timed out" in text.lower()):
        return StoreTimeout("La base de données ne répond pas (délai dépassé)")
    return StoreUnavailable(f"Erreur de base de données: {getattr(error, 'msg', None) or text}")
