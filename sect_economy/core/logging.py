"""로깅 설정: 모든 모듈이 같은 포맷을 쓴다"""

import logging

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
PACKAGE_LOGGER = "sect_economy"


def setup_logging(level: str = "INFO"):
    """root 는 WARNING 고정, ``level`` 은 sect_economy 로거에만 적용.

    알 수 없는 레벨 문자열은 INFO 로 처리한다.
    """
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT, datefmt=DATE_FORMAT)
    logging.getLogger(PACKAGE_LOGGER).setLevel(
        getattr(logging, level.upper(), logging.INFO)
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
