"""
Configuration from environment variables

.env.local (local dev) takes priority over .env. Values from the loaded
file override the process environment.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent


def load_environment(project_root: Path = PROJECT_ROOT) -> Optional[Path]:
    """Load .env.local or .env; returns the file used, if any"""
    env_local = project_root / ".env.local"
    env_file = project_root / ".env"

    if env_local.exists():
        load_dotenv(env_local, override=True)
        return env_local
    if env_file.exists():
        load_dotenv(env_file, override=True)
        return env_file
    return None


class Settings:
    """Runtime settings read from the environment at construction time"""

    def __init__(self):
        self.corpus_dir = os.getenv("CORPUS_DIR", "docs")
        self.index_file = os.getenv("INDEX_FILE", "")
        self.index_workers = int(os.getenv("INDEX_WORKERS", "4"))
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self.log_file = os.getenv("LOG_FILE", "logs/docsearch.log")
        self.port = int(os.getenv("PORT", "8080"))
