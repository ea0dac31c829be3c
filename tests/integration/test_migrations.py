"""Alembic migrations build the same schema as the models."""

from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect, text

from ringside.models import Base

PROJECT_ROOT = Path(__file__).resolve().parents[2]


@pytest.fixture
def alembic_config(tmp_path):
    config = Config(str(PROJECT_ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(PROJECT_ROOT / "ringside" / "migrations"))
    config.set_main_option("sqlalchemy.url", f"sqlite:///{tmp_path / 'migrated.db'}")
    config.attributes["configure_logger"] = False
    return config


@pytest.fixture
def migrated_engine(alembic_config):
    engine = create_engine(alembic_config.get_main_option("sqlalchemy.url"))
    yield engine
    engine.dispose()


class TestMigrations:
    """upgrade head / downgrade base."""

    def test_upgrade_creates_model_tables(self, alembic_config, migrated_engine):
        command.upgrade(alembic_config, "head")

        inspector = inspect(migrated_engine)
        tables = set(inspector.get_table_names()) - {"alembic_version"}
        assert tables == set(Base.metadata.tables)

    def test_upgrade_creates_model_columns(self, alembic_config, migrated_engine):
        command.upgrade(alembic_config, "head")

        inspector = inspect(migrated_engine)
        for name, table in Base.metadata.tables.items():
            expected = {column.name for column in table.columns}
            actual = {column["name"] for column in inspector.get_columns(name)}
            assert actual == expected, name

    def test_upgrade_creates_model_indexes(self, alembic_config, migrated_engine):
        command.upgrade(alembic_config, "head")

        inspector = inspect(migrated_engine)
        for name, table in Base.metadata.tables.items():
            expected = {index.name for index in table.indexes}
            actual = {index["name"] for index in inspector.get_indexes(name)}
            assert actual == expected, name

    def test_upgrade_creates_triggers(self, alembic_config, migrated_engine):
        command.upgrade(alembic_config, "head")

        with migrated_engine.connect() as conn:
            triggers = conn.execute(
                text("SELECT name FROM sqlite_master WHERE type = 'trigger'")
            ).scalars().all()

        assert len(triggers) == 6

    def test_downgrade_to_base(self, alembic_config, migrated_engine):
        command.upgrade(alembic_config, "head")
        command.downgrade(alembic_config, "base")

        inspector = inspect(migrated_engine)
        assert set(inspector.get_table_names()) == {"alembic_version"}
