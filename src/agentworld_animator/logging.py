"""
Logging setup for the animated view controller.

Defaults:
- INFO/DEBUG records go to stdout, WARNING and above to stderr
- Level INFO (overridable via env)
- Optional JSON format and optional rotating log file via env

Env options (optional):
- AGENT_LOG_LEVEL=DEBUG|INFO|WARNING|ERROR (default INFO)
- AGENT_LOG_JSON=1 (JSON formatting)
- AGENT_LOG_FILE=/path/to/file.log (RotatingFileHandler)
- AGENT_LOG_DIR=/path/to/dir (uses <service>.log when AGENT_LOG_FILE unset)
"""

from __future__ import annotations

import json
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Iterable, List, Optional, Tuple


SERVICE_NAME = "animator"

_INITIALIZED = False
_DEFAULT_SERVICE = ""
_SERVICE_PREFIXES: List[Tuple[str, str]] = []

__all__ = [
    "SERVICE_NAME",
    "setup_logging",
    "get_logger",
    "module_logger",
]


def _truthy(value: Optional[str]) -> bool:
    return str(value).lower() in ('1', 'true', 'yes', 'on')


def _register_alias(service: str, alias: str) -> None:
    alias = alias.strip()
    if not alias:
        return

    for idx, (prefix, _) in enumerate(_SERVICE_PREFIXES):
        if prefix == alias:
            _SERVICE_PREFIXES[idx] = (alias, service)
            break
    else:
        _SERVICE_PREFIXES.append((alias, service))

    # Longest prefixes first so nested packages win
    _SERVICE_PREFIXES.sort(key=lambda item: len(item[0]), reverse=True)


def _service_for(record: logging.LogRecord) -> str:
    current = getattr(record, 'service', None)
    if current:
        return current

    for prefix, service in _SERVICE_PREFIXES:
        if record.name == prefix or record.name.startswith(f"{prefix}."):
            return service
    return _DEFAULT_SERVICE


class _ServiceFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.service = _service_for(record)
        return True


class _JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            'ts': self.formatTime(record, datefmt='%Y-%m-%dT%H:%M:%S'),
            'level': record.levelname,
            'name': record.name,
            'service': getattr(record, 'service', ''),
            'message': record.getMessage(),
        }
        return json.dumps(payload, ensure_ascii=False)


class _LevelRangeFilter(logging.Filter):
    def __init__(self, min_level: int = logging.NOTSET, max_level: int = logging.CRITICAL):
        super().__init__()
        self.min_level = min_level
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return self.min_level <= record.levelno <= self.max_level


def _get_level(default: str = 'INFO') -> int:
    level = os.getenv('AGENT_LOG_LEVEL', default).upper()
    return getattr(logging, level, logging.INFO)


def _log_file_path(service: str) -> Optional[str]:
    log_path = os.getenv('AGENT_LOG_FILE')
    if log_path:
        return log_path
    log_dir = os.getenv('AGENT_LOG_DIR')
    if log_dir:
        return str(Path(log_dir) / f'{service}.log')
    return None


def setup_logging(
    service: str = SERVICE_NAME,
    level: Optional[str] = None,
    json_format: Optional[bool] = None,
    aliases: Optional[Iterable[str]] = None,
) -> None:
    """Configure root logging once. Safe to call multiple times.

    Args:
        service: service label stamped on every record (e.g. 'animator')
        level: optional level override (DEBUG/INFO/...) else from env
        json_format: optional flag to force JSON format, else from env
        aliases: extra logger-name prefixes that map to this service
    """
    global _DEFAULT_SERVICE
    global _INITIALIZED

    root = logging.getLogger()

    if not _INITIALIZED:
        root.setLevel(_get_level(level or 'INFO'))

        use_json = _truthy(json_format) if json_format is not None else _truthy(os.getenv('AGENT_LOG_JSON', ''))
        if use_json:
            formatter: logging.Formatter = _JSONFormatter()
        else:
            formatter = logging.Formatter('%(asctime)s %(levelname)s %(name)s [%(service)s] %(message)s')

        service_filter = _ServiceFilter()

        stdout_handler = logging.StreamHandler(stream=sys.stdout)
        stdout_handler.addFilter(_LevelRangeFilter(max_level=logging.INFO))
        stderr_handler = logging.StreamHandler(stream=sys.stderr)
        stderr_handler.addFilter(_LevelRangeFilter(min_level=logging.WARNING))
        handlers: List[logging.Handler] = [stdout_handler, stderr_handler]

        log_path = _log_file_path(service)
        if log_path:
            try:
                Path(log_path).parent.mkdir(parents=True, exist_ok=True)
                handlers.append(logging.handlers.RotatingFileHandler(
                    log_path, maxBytes=5 * 1024 * 1024, backupCount=5, encoding='utf-8'
                ))
            except OSError:
                root.warning(f"Could not open log file {log_path}, using console only")

        for handler in handlers:
            handler.setFormatter(formatter)
            handler.addFilter(service_filter)
            root.addHandler(handler)

        _INITIALIZED = True
        if not _DEFAULT_SERVICE:
            _DEFAULT_SERVICE = service

    _register_alias(service, service)
    _register_alias(service, 'agentworld_animator')
    for alias in aliases or ():
        _register_alias(service, str(alias))


def get_logger(name: Optional[str] = None, **context) -> logging.LoggerAdapter:
    base = logging.getLogger(name or __name__)
    # Formatter always sees 'service'; the filter fills it in when blank
    context.setdefault('service', '')
    return logging.LoggerAdapter(base, context)


def module_logger(**context) -> logging.LoggerAdapter:
    """Convenience to get a logger for the caller's module."""
    name = sys._getframe(1).f_globals.get('__name__', __name__)
    return get_logger(name, **context)
