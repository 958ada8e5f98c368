"""Country/indicator dataset.

The dataset is produced offline (World Bank export) and is read-only for the
whole life of the process. Components receive it explicitly, usually through
the ``DatasetHandle`` the app factory stores on the Flask app.
"""
import json
import math
import threading
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence


class DatasetError(Exception):
    """The dataset file is missing or malformed."""


def _coerce_value(code: str, key: str, value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DatasetError(f"Non-numeric value for {code}/{key}: {value!r}")
    if not math.isfinite(value):
        raise DatasetError(f"Non-finite value for {code}/{key}: {value!r}")
    return value


class Dataset:
    def __init__(self, countries: Mapping[str, Mapping[str, float]], indicators: Sequence[str],
                 indicator_years: Optional[Mapping[str, int]] = None):
        self._countries = MappingProxyType({
            code: MappingProxyType(dict(values)) for code, values in countries.items()
        })
        self._indicators = tuple(indicators)
        self._indicator_years = MappingProxyType(dict(indicator_years or {}))
        self._codes = tuple(self._countries.keys())

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> 'Dataset':
        """Validate a parsed ``worldbank.json`` document.

        Indicator values that are ``null`` are dropped so that a missing value
        is always an absent key. Metadata keys such as ``name`` or ``region``
        are ignored; only keys listed in ``indicators`` are kept.
        """
        if not isinstance(raw, Mapping):
            raise DatasetError('Dataset must be a JSON object')
        countries = raw.get('countries')
        indicators = raw.get('indicators')
        if not isinstance(countries, Mapping):
            raise DatasetError("'countries' must be an object")
        if not isinstance(indicators, list) or not all(isinstance(i, str) for i in indicators):
            raise DatasetError("'indicators' must be an array of strings")
        years = raw.get('indicatorYears') or {}
        if not isinstance(years, Mapping):
            raise DatasetError("'indicatorYears' must be an object")

        cleaned: Dict[str, Dict[str, float]] = {}
        for code, values in countries.items():
            if not isinstance(values, Mapping):
                raise DatasetError(f"Country {code!r} must map indicators to values")
            row = {}
            for key in indicators:
                value = _coerce_value(code, key, values.get(key))
                if value is not None:
                    row[key] = value
            cleaned[code] = row

        if len(cleaned) < 2:
            raise DatasetError('Dataset needs at least two countries')
        if not indicators:
            raise DatasetError('Dataset needs at least one indicator')
        return cls(cleaned, indicators, years)

    @property
    def countries(self) -> Mapping[str, Mapping[str, float]]:
        return self._countries

    @property
    def indicators(self) -> Sequence[str]:
        return self._indicators

    @property
    def indicator_years(self) -> Mapping[str, int]:
        return self._indicator_years

    @property
    def country_codes(self) -> Sequence[str]:
        """Country codes in file order."""
        return self._codes

    def has_country(self, code: Optional[str]) -> bool:
        return code is not None and code in self._countries

    def value(self, code: Optional[str], indicator: Optional[str]) -> Optional[float]:
        row = self._countries.get(code) if code is not None else None
        if row is None or indicator is None:
            return None
        return row.get(indicator)

    def shared_indicators(self, left: str, right: str) -> List[str]:
        """Indicators, in list order, for which both countries have a value."""
        left_row = self._countries.get(left, {})
        right_row = self._countries.get(right, {})
        return [key for key in self._indicators if key in left_row and key in right_row]

    def indicator_year(self, indicator: Optional[str]) -> Optional[int]:
        if indicator is None:
            return None
        return self._indicator_years.get(indicator)

    def __len__(self) -> int:
        return len(self._codes)


def load_dataset(path: str) -> Dataset:
    try:
        with open(path, encoding='utf-8') as fh:
            raw = json.load(fh)
    except FileNotFoundError as exc:
        raise DatasetError(f"Dataset file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise DatasetError(f"Dataset file is not valid JSON: {path}: {exc}") from exc
    return Dataset.from_dict(raw)


class DatasetHandle:
    """Once-initialized, read-only access to the dataset.

    Loads from ``path`` on the first ``get()`` and hands out the same object
    afterwards. A preloaded ``Dataset`` can be passed instead of a path.
    """

    def __init__(self, path: Optional[str] = None, dataset: Optional[Dataset] = None):
        if path is None and dataset is None:
            raise ValueError('DatasetHandle needs a path or a dataset')
        self.path = path
        self._dataset = dataset
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._dataset is not None

    def get(self) -> Dataset:
        if self._dataset is None:
            with self._lock:
                if self._dataset is None:
                    self._dataset = load_dataset(self.path)
        return self._dataset
