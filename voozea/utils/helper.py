import logging
from flask import request
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from voozea.extension import db
from voozea.errors import ConflictError, StoreError

logger = logging.getLogger(__name__)


def parse_json(required_fields=None, allowed_values=None):
    """
    Read the request body as a dict.
    ``allowed_values`` maps a field name to the values it may take.
    Returns ``(data, error, status)`` where ``error`` is None on success.
    """
    data = request.get_json(force=True, silent=True) or {}

    if required_fields:
        missing = [f for f in required_fields if f not in data or data[f] in (None, "")]
        if missing:
            return None, {"message": f"Missing required fields: {', '.join(missing)}"}, 400

    for field, allowed in (allowed_values or {}).items():
        if field in data and data[field] not in allowed:
            return None, {"message": f"{field} must be one of: {', '.join(allowed)}"}, 400

    return data, None, None


def commit_or_raise(conflict_message="Duplicate record"):
    """
    Commit the session. A unique/check constraint violation becomes
    ConflictError, any other database failure StoreError; both roll back.
    """
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        logger.info(f"Integrity error on commit: {e.orig}")
        raise ConflictError(conflict_message)
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error("Database error on commit", exc_info=e)
        raise StoreError("Database error")


def like_pattern(query):
    """``%query%`` for ILIKE with the wildcard characters escaped (escape char ``\\``)."""
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def flush_or_raise(conflict_message="Duplicate record"):
    """Like commit_or_raise, for a flush in the middle of a unit of work."""
    try:
        db.session.flush()
    except IntegrityError as e:
        db.session.rollback()
        logger.info(f"Integrity error on flush: {e.orig}")
        raise ConflictError(conflict_message)
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error("Database error on flush", exc_info=e)
        raise StoreError("Database error")
