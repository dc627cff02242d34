# app/services/store.py

import uuid
from typing import List, Optional, Sequence

import requests
from pydantic import ValidationError

from app.core.config import config
from app.core.errors import ProtocolError, RecordStoreError, TransportError
from app.schemas.business import BusinessRecord, ContactStage
from app.schemas.core import APIResponse, SaveResult
from app.services.logger import Logger

log = Logger('service-store')

SEED_RECORDS = [
    {
        "id": "1",
        "businessName": "The Coffee Shop",
        "address": "123 Main St, Anytown, 12345",
        "street": "123 Main St",
        "city": "Anytown",
        "zip": "12345",
        "phone": "555-1234",
        "category": "Coffee",
        "website": "https://coffeeshop.com",
        "facebookUrl": "https://facebook.com/coffeeshop",
        "facebookLastPost": "2024-05-20",
        "instagramUrl": "https://instagram.com/coffeeshop",
        "instagramPresent": "Yes",
        "onlineOn": "2024-05-21",
        "notes": "A popular spot for locals. Great espresso.",
        "contactStage": ContactStage.NEW_LEAD.value,
        "noteHistoryEntries": [],
    },
    {
        "id": "2",
        "businessName": "Bookworm Reads",
        "address": "456 Oak Ave, Reader-ville, 54321",
        "street": "456 Oak Ave",
        "city": "Reader-ville",
        "zip": "54321",
        "phone": "555-5678",
        "category": "Books",
        "website": "https://bookwormreads.com",
        "instagramUrl": "https://instagram.com/bookwormreads",
        "instagramPresent": "Yes",
        "onlineOn": "2024-05-22",
        "notes": "Cozy atmosphere. Has a rare books section in the back.",
        "contactStage": ContactStage.NEW_LEAD.value,
        "noteHistoryEntries": [],
    },
]


def seed_records() -> List[BusinessRecord]:
    """Fresh copies of the built-in example records."""
    return [BusinessRecord.model_validate(row) for row in SEED_RECORDS]


def generate_id() -> str:
    return str(uuid.uuid4())


def _copy_all(records: Sequence[BusinessRecord]) -> List[BusinessRecord]:
    return [record.model_copy(deep=True) for record in records]


class MemoryRecordStore:
    """Record store kept in process memory, used when no backend is configured.

    The dataset belongs to this instance: it is seeded at construction and
    only goes back to the seed through reset().
    """
    def __init__(self, records: Optional[Sequence[BusinessRecord]] = None):
        self._initial = _copy_all(records) if records is not None else seed_records()
        self._records = _copy_all(self._initial)

    def reset(self):
        self._records = _copy_all(self._initial)

    def list(self) -> List[BusinessRecord]:
        log.debug(f"Fetching {len(self._records)} records from memory store")
        return _copy_all(self._records)

    def replace_all(self, records: Sequence[BusinessRecord]) -> SaveResult:
        log.info(f"Saving {len(records)} records to memory store")
        try:
            stored = []
            for record in records:
                copy = record.model_copy(deep=True)
                if not copy.id:
                    copy.id = generate_id()
                stored.append(copy)
        except (ValidationError, AttributeError) as e:
            log.error(f"Failed to save data to memory store: {e}")
            return SaveResult(success=False, error=str(e))

        self._records = stored
        return SaveResult(success=True, accepted_count=len(stored), records=_copy_all(stored))


class HttpRecordStore:
    """Client for the businesses API: GET /businesses and POST /businesses/save."""
    def __init__(self, base_url: str, timeout: float = None, session: requests.Session = None):
        if not base_url:
            raise ValueError("base_url is required for HttpRecordStore")
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout if timeout is not None else config.request_timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs) -> APIResponse:
        url = self._url(path)
        log.debug(f"{method} {url}")
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.HTTPError as e:
            raise TransportError(f"HTTP error! status: {e.response.status_code if e.response is not None else 'unknown'}") from e
        except requests.RequestException as e:
            raise TransportError(f"Request error: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise ProtocolError(f"Response is not valid JSON: {e}") from e

        try:
            result = APIResponse.model_validate(body)
        except ValidationError as e:
            raise ProtocolError(f"Invalid response format: {e}") from e

        if not result.success:
            raise ProtocolError(result.error or "Backend reported failure")
        return result

    def list(self) -> List[BusinessRecord]:
        """Fetch every record. Falls back to the seed records on any failure."""
        log.info("Fetching data from businesses API...")
        try:
            result = self._request("GET", "businesses")
            if result.data is None:
                raise ProtocolError("Invalid response format: missing data")
        except RecordStoreError as e:
            log.error(f"Error fetching data from API: {e}")
            log.warning("Falling back to seed data")
            return seed_records()

        log.info(f"Successfully fetched {result.count if result.count is not None else len(result.data)} records")
        return result.data

    def replace_all(self, records: Sequence[BusinessRecord]) -> SaveResult:
        """Send the whole collection. Failures come back as SaveResult.error, never raised."""
        log.info(f"Saving {len(records)} records to businesses API...")
        payload = {"data": [record.to_wire() for record in records]}
        try:
            result = self._request("POST", "businesses/save", json=payload)
        except RecordStoreError as e:
            log.error(f"Error saving data to API: {e}")
            return SaveResult(success=False, error=str(e))

        count = result.count if result.count is not None else len(records)
        log.info(f"Successfully saved {count} records")
        return SaveResult(success=True, accepted_count=count, records=result.data)


def get_record_store(base_url: str = None, timeout: float = None):
    """Pick the HTTP store when an endpoint base is configured, the memory store otherwise."""
    base_url = base_url if base_url is not None else config.api_base_url
    if not base_url:
        log.warning("API_GATEWAY_URL not set, using in-memory seed data")
        return MemoryRecordStore()
    return HttpRecordStore(base_url, timeout=timeout)
