"""
Utility functions for the SCKAN exporter

Provides logging setup, JSON output helpers and the exception hierarchy
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional


# ═══════════════════════════════════════════════════════════════════
# LOGGING
# ═══════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO", log_file: Optional[str | Path] = None) -> None:
    """Configure logging for the exporter.

    Records go to stderr so that stdout stays reserved for the JSON document.
    """
    level = getattr(logging, log_level.upper())

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """Get logger instance for module"""
    return logging.getLogger(name)


# ═══════════════════════════════════════════════════════════════════
# FILE I/O
# ═══════════════════════════════════════════════════════════════════

def dump_json(data: Any, indent: int | None = 2) -> str:
    """Serialize an export document the way it is written to disk."""
    return json.dumps(data, indent=indent, ensure_ascii=False)


def write_json(data: Any, file_path: str | Path, indent: int | None = 2) -> None:
    """Write JSON file"""
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "w", encoding="utf-8") as f:
        f.write(dump_json(data, indent=indent))
        f.write("\n")


# ═══════════════════════════════════════════════════════════════════
# EXCEPTIONS
# ═══════════════════════════════════════════════════════════════════

class SCKANExportError(Exception):
    """Base exception for the SCKAN exporter"""
    pass


class QueryError(SCKANExportError):
    """A graph query could not be executed"""

    def __init__(self, message: str, query_name: str | None = None) -> None:
        super().__init__(message)
        self.query_name = query_name


class ShapingError(SCKANExportError):
    """A result row is missing a variable its query guarantees"""

    def __init__(self, variable: str) -> None:
        super().__init__(f"missing required binding '{variable}'")
        self.variable = variable


class PrefixLookupError(SCKANExportError, LookupError):
    """A CURIE prefix has no registered namespace"""
    pass


class SchemaValidationError(SCKANExportError):
    """Assembled document does not match the export schema"""
    pass
