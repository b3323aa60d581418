# src/capacity_artifacts/utils/config.py
"""
Environment config for the outer surfaces (CLI, golden verification) and
the stamper.

Chart and layout constants do NOT live here; they are carried by the frozen
RenderConfig. DEFAULT_PROTOCOL does reach the document: it is the protocol
stamped on fresh artifacts that have no protocol override. Reference
documents override it, so their bytes stay fixed.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env from project root
BASE_DIR = Path(__file__).resolve().parents[3]
load_dotenv(BASE_DIR / ".env")


class Config:
    OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", BASE_DIR / "output"))
    GOLDEN_DIR = Path(os.getenv("GOLDEN_DIR", BASE_DIR / "tests" / "golden"))

    # Protocol label stamped on freshly issued (non-reference) artifacts
    DEFAULT_PROTOCOL = os.getenv("DEFAULT_PROTOCOL", "Structured EMA v4.2").strip()

    def output_path(self, filename: str) -> Path:
        """Resolve a file inside OUTPUT_DIR, creating the directory on demand."""
        self.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
        return self.OUTPUT_DIR / filename

    def __repr__(self):
        return f"<Config output={self.OUTPUT_DIR} golden={self.GOLDEN_DIR}>"


# Singleton
config = Config()
