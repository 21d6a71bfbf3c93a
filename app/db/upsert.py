"""
Conflict-aware writes against the unique constraints that back the ledgers.

PostgreSQL and SQLite get a single INSERT ... ON CONFLICT statement; other
backends fall back to an insert inside a SAVEPOINT, resolved on
IntegrityError.
"""
from typing import Dict, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError


def _dialect_insert(db: Session):
    name = db.get_bind().dialect.name
    if name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
        return insert
    if name == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
        return insert
    return None


def upsert(db: Session, model, values: Dict, conflict_keys: List[str], update: Dict) -> str:
    """
    Insert values, or apply update to the row that owns conflict_keys.

    Returns the id of the row written. It equals values["id"] only when this
    call inserted the row.
    """
    insert = _dialect_insert(db)
    if insert is not None:
        stmt = insert(model).values(**values).on_conflict_do_update(
            index_elements=conflict_keys,
            set_=update,
        ).returning(model.id)
        return db.execute(stmt).scalar_one()

    try:
        with db.begin_nested():
            db.add(model(**values))
        return values["id"]
    except IntegrityError:
        updated = (
            db.query(model)
            .filter_by(**{key: values[key] for key in conflict_keys})
            .update(update, synchronize_session=False)
        )
        # The conflicting row was deleted between our insert and update
        if not updated:
            raise ConflictError(f"Concurrent write on {model.__tablename__}, try again")
        return db.query(model.id).filter_by(**{key: values[key] for key in conflict_keys}).scalar()


def insert_if_absent(db: Session, instance) -> bool:
    """Insert instance unless a unique constraint already holds it. True when inserted."""
    try:
        with db.begin_nested():
            db.add(instance)
        return True
    except IntegrityError:
        return False
