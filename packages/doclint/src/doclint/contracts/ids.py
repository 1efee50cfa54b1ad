from __future__ import annotations

CONFIG = "doclint.config.v1"
CHECK_RUN = "doclint.check-run.v1"
ERROR = "doclint.error.v1"
