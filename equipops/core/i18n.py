"""Localization of error codes returned by the EquipOps API."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable

from fastapi import Request

from .logging import logger
from .settings import settings

SUPPORTED_LOCALES: set[str] = {"en", "de"}
LOCALES_DIR = Path(__file__).resolve().parents[1] / "locales"


def _ensure_locale(locale: str | None) -> str:
    if not locale:
        return settings.default_locale
    code = locale.split("-")[0].strip().lower()
    if code not in SUPPORTED_LOCALES:
        return settings.default_locale
    return code


normalize_locale = _ensure_locale


@lru_cache()
def _load_catalog(locale: str) -> Dict[str, str]:
    catalog_path = LOCALES_DIR / f"{locale}.json"
    try:
        with catalog_path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
            if not isinstance(data, dict):
                raise ValueError("Locale catalog must be a dictionary")
            return {str(key): str(value) for key, value in data.items()}
    except FileNotFoundError:
        logger.warning("i18n.catalog_missing", locale=locale, path=str(catalog_path))
    except (json.JSONDecodeError, ValueError):
        logger.exception("i18n.catalog_invalid", locale=locale, path=str(catalog_path))
    return {}


def reload_catalogs(locales: Iterable[str] | None = None) -> None:
    """Invalidate cached catalogs to pick up updated locale files."""

    targets = tuple(locales or SUPPORTED_LOCALES)
    _load_catalog.cache_clear()
    for locale in targets:
        _load_catalog(locale)


def translate(locale: str, key: str, **kwargs: Any) -> str:
    """Translate a message key using the requested locale."""

    locale_code = _ensure_locale(locale)
    base_catalog = _load_catalog(settings.default_locale)
    catalog = _load_catalog(locale_code) or base_catalog
    template = catalog.get(key) or base_catalog.get(key) or key
    try:
        return template.format(**kwargs)
    except (KeyError, IndexError, ValueError):
        logger.debug("i18n.format_error", key=key, locale=locale_code, kwargs=kwargs)
        return template


def get_locale_from_request(request: Request) -> str:
    explicit = request.headers.get("x-locale")
    if explicit:
        return _ensure_locale(explicit)

    accept = request.headers.get("accept-language", "")
    for part in accept.split(","):
        code = part.split(";")[0].strip()
        if code:
            return _ensure_locale(code)
    return settings.default_locale


__all__ = [
    "SUPPORTED_LOCALES",
    "normalize_locale",
    "translate",
    "get_locale_from_request",
    "reload_catalogs",
]
