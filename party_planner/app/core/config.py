"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields and point
at the public cohort of the party data service, so the page works out
of the box.  Override them via environment variables in a deployment.
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Party Planner")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Root of the REST data service and the cohort whose records the
    # page manages.  Resources live under ``{api_base}/{cohort}/``.
    api_base: str = os.getenv("PARTY_API_BASE", "https://fsa-crud-2aa9294fe819.herokuapp.com/api")
    cohort: str = os.getenv("PARTY_API_COHORT", "2509-pt-mac")
    request_timeout: float = float(os.getenv("PARTY_API_TIMEOUT", "15"))

    # Only used by ``run.py``.
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    @property
    def api_url(self) -> str:
        return f"{self.api_base.rstrip('/')}/{self.cohort.strip('/')}"


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables
# should be set before importing this module.
settings = Settings()
