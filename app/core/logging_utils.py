import logging
import json
import sys
from pathlib import Path
from datetime import datetime
from typing import Any, Dict

from app.core.config import settings

_RESERVED_ATTRS = {
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs', 'message',
    'pathname', 'process', 'processName', 'relativeCreated', 'thread',
    'threadName', 'exc_info', 'exc_text', 'stack_info', 'extra_data',
    'taskName',
}

# Bibliotecas barulhentas em INFO/DEBUG
_NOISY_LOGGERS = ("asyncio", "playwright", "pdfminer", "uvicorn.access")


class JSONFormatter(logging.Formatter):
    """
    Formatter que emite cada registro de log como uma linha JSON.
    """
    def format(self, record: logging.LogRecord) -> str:
        log_obj: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_data"):
            log_obj["data"] = record.extra_data

        # Atributos passados via extra={}
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key.startswith('_'):
                continue
            log_obj[key] = value

        return json.dumps(log_obj, ensure_ascii=False, default=str)


def setup_logging(level: str = None, log_dir: str = None) -> None:
    """
    Configura o root logger para emitir JSON.

    - Console: stdout (sempre)
    - Arquivo: <log_dir>/server_YYYYMMDD.log, apenas se LOG_DIR estiver definido
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    log_dir = settings.LOG_DIR if log_dir is None else log_dir

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.setLevel(getattr(logging, level_name, logging.INFO))
    formatter = JSONFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_dir:
        logs_path = Path(log_dir)
        logs_path.mkdir(parents=True, exist_ok=True)
        log_filename = logs_path / f"server_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.FileHandler(log_filename, encoding='utf-8')
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logging.getLogger(__name__).info(f"📝 Logs sendo salvos em: {log_filename.absolute()}")

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
