"""로깅 설정 모듈.

Logging configuration module.
Configures the root logger exactly once with a console handler.
Request/response shipping to Axiom is handled separately by
app.middleware.axiom_logging.
"""

import logging

_LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    """루트 로거를 설정합니다. 이미 핸들러가 있으면 건너뜁니다.

    Configure the root logger with a console handler.
    Skips configuration if handlers are already attached
    (e.g. under pytest or uvicorn's own logging setup).

    Args:
        level: 로그 레벨 이름, 대소문자 무시 (Level name such as "DEBUG", case-insensitive)
    """
    root: logging.Logger = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler: logging.StreamHandler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT))
    root.addHandler(handler)
