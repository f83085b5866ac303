import logging
import sys
from pathlib import Path

from alembic import command
from alembic.config import Config

logger = logging.getLogger(__name__)


def _app_dir() -> Path:
    """
    Returns the directory holding the ``migration`` folder.
    - For PyInstaller onefile builds, prefer sys._MEIPASS (temporary extraction dir).
    - For PyInstaller onedir builds, use the folder containing the executable.
    - In dev: return the project root (infra -> project root).
    """
    if getattr(sys, "frozen", False):
        meipass = getattr(sys, "_MEIPASS", None)
        if meipass:
            return Path(meipass).resolve()
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[1]


def migration_dir() -> Path:
    app_dir = _app_dir()
    candidates = [app_dir / "migration", app_dir / "_internal" / "migration"]
    for candidate in candidates:
        if (candidate / "env.py").exists():
            return candidate
    raise RuntimeError(
        "Alembic script_location missing. Tried the following locations: "
        + ", ".join(str(p) for p in candidates)
    )


def alembic_config(db_url: str) -> Config:
    script_location = migration_dir()
    ini = script_location / "alembic.ini"
    cfg = Config(str(ini)) if ini.exists() else Config()
    cfg.set_main_option("script_location", str(script_location))
    cfg.set_main_option("sqlalchemy.url", db_url)
    cfg.attributes["configure_logger"] = False
    return cfg


def run_migrations(db_url: str) -> None:
    logger.info("Upgrading schema at %s to head", db_url)
    command.upgrade(alembic_config(db_url), "head")
