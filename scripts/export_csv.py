"""Write the attendance CSV from the configured store to disk.

Useful as a backup when the kiosk has no browser attached.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.site_kiosk.site_kiosk.container import build_container, build_store


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    store = build_store(
        settings.STORAGE_BACKEND,
        data_file=getattr(settings, "DATA_FILE", None),
        db_config=getattr(settings, "DB_CONFIG", None),
    )
    container = build_container(store=store)

    filename, content = container.kiosk_service.export_csv()
    out_dir = REPO_ROOT / "exports"
    out_dir.mkdir(parents=True, exist_ok=True)
    out_file = out_dir / filename
    out_file.write_text(content, encoding="utf-8")
    print(f"OK: {container.kiosk_service.visit_count()} visits exported to {out_file}")


if __name__ == "__main__":
    main()
