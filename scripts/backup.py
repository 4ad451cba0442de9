"""Dump the attendance database with ``mysqldump``.

Requires the MySQL client tools on PATH.
"""

from __future__ import annotations

import importlib
import logging
import subprocess
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

logger = logging.getLogger("backup")


def mysqldump_command(db: dict) -> list[str]:
    """Arguments for ``mysqldump``; ``-p`` is left out when no password is set."""
    cmd = [
        "mysqldump",
        f"-h{db['host']}",
        f"-P{db.get('port', 3306)}",
        f"-u{db['user']}",
    ]
    if db.get("password"):
        cmd.append(f"-p{db['password']}")
    cmd += ["--single-transaction", db["database"]]
    return cmd


def dump(db: dict, out_file: Path) -> Path:
    """Write the dump to ``out_file``; a failed dump leaves no file behind."""
    try:
        with out_file.open("wb") as f:
            subprocess.run(mysqldump_command(db), stdout=f, stderr=subprocess.PIPE, check=True)
    except FileNotFoundError:
        out_file.unlink(missing_ok=True)
        raise SystemExit("mysqldump not found; install the MySQL client tools")
    except subprocess.CalledProcessError as e:
        out_file.unlink(missing_ok=True)
        detail = (e.stderr or b"").decode("utf-8", "replace").strip()
        logger.error("mysqldump exited with %s: %s", e.returncode, detail)
        raise SystemExit(f"Backup failed (mysqldump exit code {e.returncode})")
    return out_file


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    settings = importlib.import_module(get_settings_module())
    db = settings.DB_CONFIG

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = dump(db, out_dir / f"{db['database']}_{ts}.sql")
    logger.info("Backup created: %s", out_file)


if __name__ == "__main__":
    main()
