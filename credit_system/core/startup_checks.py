from __future__ import annotations

import logging
import os
import subprocess
import sys
from pathlib import Path

from alembic.config import Config
from alembic.script import ScriptDirectory
from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from credit_system.core.config import DATABASE_URL, is_falsy, is_truthy

logger = logging.getLogger(__name__)
STARTUP_PREFIX = "[STARTUP]"
PRODUCTION_ENVS = {"prod", "production"}


def _current_env() -> str:
    return os.getenv("ENVIRONMENT", os.getenv("ENV", "dev")).strip().lower()


def _require_alembic_config(path: Path) -> Config:
    if not path.exists():
        logger.critical("%s alembic config not found path=%s", STARTUP_PREFIX, path)
        raise RuntimeError("alembic config not found")
    return Config(str(path))


def _should_auto_apply(env: str) -> bool:
    # vazio = aplica fora do ambiente de teste
    flag = os.getenv("AUTO_APPLY_MIGRATIONS", "")
    if is_falsy(flag):
        return False
    if is_truthy(flag):
        return True
    return not flag.strip() and env != "test"


def _database_heads(engine: Engine) -> set[str]:
    with engine.connect() as connection:
        if "alembic_version" not in inspect(connection).get_table_names():
            logger.critical("%s alembic_version table missing", STARTUP_PREFIX)
            raise RuntimeError("Database has no migration state")
        rows = connection.exec_driver_sql("SELECT version_num FROM alembic_version").fetchall()
    return {row[0] for row in rows if row and row[0]}


def validate_database_environment() -> None:
    """SQLite só é aceito fora de produção."""
    if _current_env() in PRODUCTION_ENVS and DATABASE_URL.startswith("sqlite"):
        logger.critical("%s SQLite is forbidden in production", STARTUP_PREFIX)
        raise RuntimeError("SQLite is forbidden in production environment")


def apply_migrations(*, alembic_config_path: Path) -> None:
    """Upgrade the schema to head with the alembic CLI of the running interpreter."""
    env = _current_env()
    if not _should_auto_apply(env):
        logger.info("%s auto migration off env=%s", STARTUP_PREFIX, env)
        return

    _require_alembic_config(alembic_config_path)
    command = [sys.executable, "-m", "alembic", "-c", str(alembic_config_path), "upgrade", "head"]
    logger.info("%s upgrading customers/credits schema to head", STARTUP_PREFIX)
    try:
        subprocess.run(command, check=True, capture_output=True, text=True)
    except subprocess.CalledProcessError as exc:
        logger.critical(
            "%s alembic upgrade failed returncode=%s stderr=%s",
            STARTUP_PREFIX,
            exc.returncode,
            (exc.stderr or "").strip(),
        )
        raise RuntimeError("Automatic migration failed") from exc


def ensure_migrations_applied(*, engine: Engine, alembic_config_path: Path) -> None:
    if _current_env() == "test":
        return

    scripts = ScriptDirectory.from_config(_require_alembic_config(alembic_config_path))
    expected = set(scripts.get_heads())
    current = _database_heads(engine)

    if current != expected:
        logger.critical(
            "%s schema out of date current=%s expected=%s",
            STARTUP_PREFIX,
            sorted(current),
            sorted(expected),
        )
        raise RuntimeError("Pending migrations detected")

    logger.info("%s schema at head=%s", STARTUP_PREFIX, sorted(expected))
