from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect, text

from app.db.base import Base
from app.models.constants import Permission


ALEMBIC_INI = Path(__file__).resolve().parents[1] / 'alembic.ini'


def _alembic_config(url: str) -> Config:
    config = Config(str(ALEMBIC_INI))
    config.set_main_option('sqlalchemy.url', url)
    return config


def test_migrations_match_mapped_schema_and_seed_roles(tmp_path: Path) -> None:
    url = f"sqlite+pysqlite:///{tmp_path / 'migrations.db'}"
    config = _alembic_config(url)

    command.upgrade(config, 'head')

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        assert set(inspector.get_table_names()) == set(Base.metadata.tables) | {'alembic_version'}
        for name, table in Base.metadata.tables.items():
            assert {column['name'] for column in inspector.get_columns(name)} == set(table.columns.keys()), name

        with engine.connect() as connection:
            roles = connection.execute(text('select name from roles order by name')).scalars().all()
            permission_count = connection.execute(text('select count(*) from permissions')).scalar_one()
            user_grants = connection.execute(
                text(
                    'select p.name from role_permissions rp '
                    'join roles r on r.id = rp.role_id '
                    'join permissions p on p.id = rp.permission_id '
                    "where r.name = 'user' order by p.name"
                )
            ).scalars().all()
    finally:
        engine.dispose()

    assert roles == ['admin', 'owner', 'user']
    assert permission_count == len(Permission)
    assert user_grants == ['SESSION_READ', 'SESSION_UPDATE']

    command.downgrade(config, 'base')

    engine = create_engine(url)
    try:
        assert set(inspect(engine).get_table_names()) == {'alembic_version'}
    finally:
        engine.dispose()
