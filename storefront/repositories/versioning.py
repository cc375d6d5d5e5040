"""
Optimistic-concurrency writes shared by the repositories
"""
import logging

from sqlalchemy import update
from sqlalchemy.orm import Session

from storefront.errors import EditConflictError

logger = logging.getLogger(__name__)


def update_versioned(db: Session, model, record_id: int, version: int, **values) -> int:
    """
    Update a row only if it still carries the version the caller read

    The statement is conditioned on both primary key and version and bumps
    the version on success. It does not commit.

    Args:
        db: Session the statement runs in
        model: Mapped class with ``id`` and ``version`` columns
        record_id: Primary key
        version: Last-seen version
        **values: Columns to set

    Returns:
        The new version

    Raises:
        EditConflictError: If no row matched (version changed or row gone)
    """
    stmt = (
        update(model)
        .where(model.id == record_id, model.version == version)
        .values(version=model.version + 1, **values)
        .execution_options(synchronize_session=False)
    )
    result = db.execute(stmt)

    if result.rowcount == 0:
        logger.info("Edit conflict on %s id=%s version=%s", model.__tablename__, record_id, version)
        raise EditConflictError()

    return version + 1
