"""Data sources that supply raw record collections to list views.

The hosted row-storage service is an external collaborator. This module only
speaks its REST query contract (PostgREST style): select, order, eq filters,
limit/offset paging, API key headers.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional
import sys

import requests
from tenacity import (
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.logging_config import get_logger
from config.settings import DataSourceConfig
from src.exceptions import DataSourceError
from src.records.loader import load_records
from src.records.schemas import get_schema

logger = get_logger("source")


def is_transient_error(exc: BaseException) -> bool:
    """Whether a failed request is worth retrying (network trouble, 429 or 5xx)."""
    if isinstance(exc, (requests.ConnectionError, requests.Timeout)):
        return True
    if isinstance(exc, requests.HTTPError):
        status = getattr(exc.response, "status_code", None)
        return status is not None and (status == 429 or status >= 500)
    return False


class RecordSource(ABC):
    """Supplies the raw collection for one list view."""

    entity: str

    @abstractmethod
    def fetch(self) -> List[Any]:
        """Fetch the current collection as typed entities."""


class StaticSource(RecordSource):
    """In-memory rows, for previews, fixtures and offline use."""

    def __init__(self, rows: Iterable[Mapping[str, Any]], entity: str):
        get_schema(entity)
        self.entity = entity
        self._rows = list(rows)

    def fetch(self) -> List[Any]:
        return load_records(self._rows, self.entity)


class RestRecordSource(RecordSource):
    """Client for one table of the hosted row-storage REST API."""

    def __init__(
        self,
        table: str,
        entity: str,
        settings: DataSourceConfig,
        select: str = "*",
        order: Optional[str] = None,
        filters: Optional[Dict[str, Any]] = None,
        session: Optional[requests.Session] = None,
        retry_wait=None,
    ):
        """
        Initialize the source.

        Args:
            table: Table (or view) name to query.
            entity: Entity type the rows are converted into.
            settings: Endpoint, key, timeout and retry settings.
            select: Column selection, may embed related tables.
            order: Ordering, e.g. "delivery_date.desc".
            filters: Equality filters, column -> value.
            session: HTTP session (a new one if None).
            retry_wait: tenacity wait strategy between retries.
        """
        if not settings.is_configured:
            raise DataSourceError("No data service URL configured (SHOP_DATA_URL)")
        get_schema(entity)

        self.table = table
        self.entity = entity
        self.settings = settings
        self.select = select
        self.order = order
        self.filters = dict(filters or {})
        self.session = session or requests.Session()
        self.retry_wait = retry_wait or wait_exponential(multiplier=1, min=1, max=10)
        self._request_count = 0

    @property
    def url(self) -> str:
        return f"{self.settings.base_url}/rest/v1/{self.table}"

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.settings.api_key:
            headers["apikey"] = self.settings.api_key
            headers["Authorization"] = f"Bearer {self.settings.api_key}"
        return headers

    def _params(self, offset: int) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "select": self.select,
            "limit": self.settings.page_size,
            "offset": offset,
        }
        if self.order:
            params["order"] = self.order
        for column, value in self.filters.items():
            params[column] = f"eq.{value}"
        return params

    def _log_retry(self, retry_state) -> None:
        logger.warning(
            f"Request to {self.table} failed (attempt {retry_state.attempt_number}), retrying..."
        )

    def _request_page(self, offset: int) -> List[Dict[str, Any]]:
        """Fetch one page, retrying transient failures."""
        retrying = Retrying(
            stop=stop_after_attempt(max(1, self.settings.max_retries)),
            wait=self.retry_wait,
            retry=retry_if_exception(is_transient_error),
            before_sleep=self._log_retry,
            reraise=True,
        )
        logger.debug(f"GET {self.table}: offset={offset}")

        for attempt in retrying:
            with attempt:
                response = self.session.get(
                    self.url,
                    params=self._params(offset),
                    headers=self._headers(),
                    timeout=self.settings.timeout,
                )
                self._request_count += 1
                response.raise_for_status()

        payload = response.json()
        if not isinstance(payload, list):
            raise DataSourceError(f"Unexpected response shape from {self.table}")
        return payload

    def fetch_rows(self) -> List[Dict[str, Any]]:
        """
        Fetch every row, page by page.

        Raises:
            DataSourceError: If the service keeps failing or answers with
                something other than a list of rows.
        """
        rows: List[Dict[str, Any]] = []
        offset = 0
        try:
            while True:
                page = self._request_page(offset)
                rows.extend(page)
                if len(page) < self.settings.page_size:
                    break
                offset += len(page)
        except requests.RequestException as e:
            raise DataSourceError(f"Failed to fetch {self.table}: {e}") from e

        logger.info(f"Fetched {len(rows)} rows from {self.table}")
        return rows

    def fetch(self) -> List[Any]:
        return load_records(self.fetch_rows(), self.entity)
