"""Display helpers: country names and flags, indicator labels, number formatting.

Country metadata comes from REST Countries and is cached in-process. Lookups
never raise; when the service is down the code itself is shown without a flag.
"""
import threading
import time
from typing import Dict, Optional, Tuple

import requests
from flask import current_app, has_app_context

# REST Countries lacks some territories; World Bank uses XKX for Kosovo
FALLBACK_COUNTRIES: Dict[str, Dict[str, str]] = {
    'XKX': {'name': 'Kosovo', 'flag_url': 'https://flagcdn.com/xk.svg'},
}

INDICATOR_LABELS: Dict[str, str] = {
    'population': 'population',
    'gdpPerCapita': 'GDP per capita',
    'lifeExpectancy': 'life expectancy',
    'educationExpenditure': 'education expenditure (% of GDP)',
    'fertilityRate': 'fertility rate (births per woman)',
    'literacyRate': 'adult literacy rate (%)',
    'landArea': 'land area (sq km)',
    'renewableElectricity': 'renewable electricity (% of total)',
    'populationGrowth': 'population growth (annual %)',
    'unemploymentRate': 'unemployment rate (% of labor force)',
    'inflation': 'inflation, consumer prices (annual %)',
    'netMigration': 'net migration',
    'deathRate': 'death rate (per 1,000 people)',
    'diabetesPrevalence': 'diabetes prevalence (%)',
    'giniIndex': 'wealth inequality (Gini index)',
    'intentionalHomicides': 'intentional homicides (per 100,000 people)',
}

DEFAULT_URL = 'https://restcountries.com/v3.1/alpha/{code}'
DEFAULT_TTL_SEC = 60 * 60 * 24
DEFAULT_TIMEOUT_SEC = 5.0

_cache: Dict[str, Tuple[float, Dict[str, str]]] = {}
_cache_lock = threading.Lock()


def _setting(name: str, default):
    if has_app_context():
        return current_app.config.get(name, default)
    return default


def _log_warning(message: str) -> None:
    if has_app_context():
        current_app.logger.warning(message)


def _fallback(code: str) -> Dict[str, str]:
    if code.upper() in FALLBACK_COUNTRIES:
        return dict(FALLBACK_COUNTRIES[code.upper()])
    return {'name': code, 'flag_url': ''}


def _fetch(code: str) -> Optional[Dict[str, str]]:
    url = _setting('COUNTRY_INFO_URL', DEFAULT_URL).format(code=code.lower())
    timeout = float(_setting('COUNTRY_INFO_TIMEOUT_SEC', DEFAULT_TIMEOUT_SEC))
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
        entry = data[0] if isinstance(data, list) else data
        name = (entry.get('name', {}).get('common') or '').strip()
        flag_url = ((entry.get('flags') or {}).get('svg') or '').strip()
    except (requests.RequestException, ValueError, KeyError, IndexError, AttributeError, TypeError) as exc:
        _log_warning(f"[country-info] lookup failed code={code} error={exc}")
        return None
    if not name:
        return None
    if not flag_url and code.upper() in FALLBACK_COUNTRIES:
        flag_url = FALLBACK_COUNTRIES[code.upper()]['flag_url']
    return {'name': name, 'flag_url': flag_url}


def country_info(code: Optional[str]) -> Dict[str, str]:
    """Return ``{'name', 'flag_url'}`` for a country code."""
    if not code:
        return {'name': code or '', 'flag_url': ''}
    if code.upper() in FALLBACK_COUNTRIES:
        return _fallback(code)
    if not _setting('COUNTRY_INFO_ENABLED', True):
        return _fallback(code)

    now = time.monotonic()
    with _cache_lock:
        hit = _cache.get(code)
    if hit and hit[0] > now:
        return dict(hit[1])

    info = _fetch(code)
    if info is None:
        # Failures are not cached so the next request retries
        return _fallback(code)
    ttl = int(_setting('COUNTRY_INFO_TTL_SEC', DEFAULT_TTL_SEC))
    with _cache_lock:
        _cache[code] = (now + ttl, info)
    return dict(info)


def clear_country_cache() -> None:
    with _cache_lock:
        _cache.clear()


def indicator_label(key: Optional[str]) -> str:
    return INDICATOR_LABELS.get(str(key), str(key)) if key is not None else ''


def format_stat_value(value) -> str:
    if value is None:
        return ''
    if isinstance(value, int) or float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:.2f}"
