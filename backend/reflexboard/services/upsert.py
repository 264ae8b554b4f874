from sqlalchemy.dialects import postgresql, sqlite

from reflexboard import db

_INSERTS = {
    'sqlite': sqlite.insert,
    'postgresql': postgresql.insert,
}


def dialect_insert(table):
    """``INSERT`` construct for the bound engine that supports ``on_conflict_do_update``."""
    dialect = db.engine.dialect.name
    try:
        return _INSERTS[dialect](table)
    except KeyError:
        raise RuntimeError(f'upserts need ON CONFLICT support, unsupported dialect: {dialect}')
