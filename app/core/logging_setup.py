# app/core/logging_setup.py

"""
표준 logging 모듈의 루트 로거를 초기화합니다.
각 모듈은 `logging.getLogger(__name__)` 로 로거를 생성하고,
메시지는 `"Operation: key=%s"` 형태의 키-값 쌍으로 남깁니다.
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_initialized = False


def setup_logging(level: Optional[str] = None) -> None:
    """루트 로거에 stdout 핸들러를 한 번만 설치합니다."""
    global _initialized
    log_level = getattr(logging, (level or "INFO").upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    if _initialized:
        return

    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)

    _initialized = True
