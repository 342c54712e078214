"""
Store initialization script.

Creates the configured store (SQLite tables or JSON document) so the
server starts against an initialised backend.

Usage:
    python scripts/init_db.py
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

from app.core.config import settings
from app.core.exceptions import StoreUnavailable
from app.store import build_store

if __name__ == "__main__":
    print("=" * 50)
    print("Training Load Tracker Store Initialization")
    print("=" * 50)
    print()

    try:
        store = build_store()
        dataset = store.load_all()
        if settings.STORE_BACKEND == "json" and not Path(settings.DATA_FILE).exists():
            store.clear_all()
        print(f"Backend: {store.backend}")
        print(f"Players: {len(dataset.players)}, version {dataset.version}")
        print()
        print("=" * 50)
        print("SUCCESS: Store initialized!")
        print("=" * 50)
        sys.exit(0)

    except (StoreUnavailable, ValueError) as e:
        print()
        print("=" * 50)
        print("ERROR: Store initialization failed!")
        print(f"Details: {e}")
        print("=" * 50)
        sys.exit(1)
