from pathlib import Path

# This file lives at <repo>/src/player_profile/core/paths.py
# Repo root is 3 levels up (paths.py -> core -> player_profile -> src -> <repo>)
PROJECT_ROOT = Path(__file__).resolve().parents[3]

DATA_DIR = PROJECT_ROOT / "data"
PROFILES_DIR = DATA_DIR / "profiles"

DEFAULT_SNAPSHOT_LOG = PROFILES_DIR / "snapshots.jsonl"
