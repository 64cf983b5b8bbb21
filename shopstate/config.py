"""Settings from the environment and structlog setup."""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

import structlog

DEFAULT_LOG_LEVEL = "info"
DEFAULT_TAX_RATE = 0.08
DEFAULT_COD_FEE = 3.2
DEFAULT_SEARCH_DEBOUNCE_MS = 300


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure structlog with JSON rendering and ISO timestamps."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_level_number(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )


def _level_number(level: str) -> int:
    number = logging.getLevelName(level.upper())
    if not isinstance(number, int):
        raise ValueError(f"unknown log level: {level!r}")
    return number


def _float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


def _int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    log_level: str = DEFAULT_LOG_LEVEL
    tax_rate: float = DEFAULT_TAX_RATE
    cod_fee: float = DEFAULT_COD_FEE
    search_debounce_ms: int = DEFAULT_SEARCH_DEBOUNCE_MS
    catalog_path: Optional[str] = None

    @property
    def search_debounce_seconds(self) -> float:
        return self.search_debounce_ms / 1000

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Read settings from environment variables.

        Environment variables:
            SHOPSTATE_LOG_LEVEL: structlog filtering level (default: info)
            SHOPSTATE_TAX_RATE: Tax rate applied in the cart summary (default: 0.08)
            SHOPSTATE_COD_FEE: Cash-on-delivery surcharge (default: 3.2)
            SHOPSTATE_SEARCH_DEBOUNCE_MS: Search input settle delay (default: 300)
            SHOPSTATE_CATALOG_PATH: JSON product file for JsonCatalogSource

        Raises:
            ValueError: If a numeric variable does not parse.
        """
        if environ is None:
            environ = os.environ

        log_level = environ.get("SHOPSTATE_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().lower()
        _level_number(log_level)

        return cls(
            log_level=log_level,
            tax_rate=_float(environ, "SHOPSTATE_TAX_RATE", DEFAULT_TAX_RATE),
            cod_fee=_float(environ, "SHOPSTATE_COD_FEE", DEFAULT_COD_FEE),
            search_debounce_ms=_int(
                environ, "SHOPSTATE_SEARCH_DEBOUNCE_MS", DEFAULT_SEARCH_DEBOUNCE_MS
            ),
            catalog_path=environ.get("SHOPSTATE_CATALOG_PATH") or None,
        )
