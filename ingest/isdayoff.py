"""
isdayoff.ru client: tells whether a day is a working, non-working or short day.

REST API description: https://www.isdayoff.ru/desc/ and https://www.isdayoff.ru/extapi/
Only the russian work calendar is supported.
"""

import logging
from typing import Optional

import requests

from errors import UpstreamFetchError
from models import DAY_FORMAT, DayType, as_date

logger = logging.getLogger(__name__)

DEFAULT_URL = "https://isdayoff.ru"

# isdayoff.ru error codes, returned in the body of 4xx responses
_ERR_BAD_DAY = 100
_ERR_NO_DATA = 101
_ERR_UNAVAILABLE = 199


class DayTypeFetchError(UpstreamFetchError):
    """Base error of the isdayoff.ru client."""


class BadDayFormatError(DayTypeFetchError):
    def __init__(self, msg: str = "invalid day format. example: YYYYMMDD or YYYY-MM-DD"):
        super().__init__(msg)


class DataNotFoundError(DayTypeFetchError):
    def __init__(self, msg: str = "day data not found"):
        super().__init__(msg)


class ServiceUnavailableError(DayTypeFetchError):
    def __init__(self, msg: str = "service not working"):
        super().__init__(msg)


class NonIntegerResponseError(DayTypeFetchError):
    def __init__(self, msg: str = "service return non-integer code"):
        super().__init__(msg)


class UnknownResponseError(DayTypeFetchError):
    def __init__(self, msg: str = "service return non-specified code"):
        super().__init__(msg)


_DAY_TYPE_CODES = {DayType.WORK_DAY, DayType.NON_WORK_DAY, DayType.SHORT_WORK_DAY}

_CLIENT_ERRORS = {
    _ERR_BAD_DAY: BadDayFormatError,
    _ERR_NO_DATA: DataNotFoundError,
    _ERR_UNAVAILABLE: ServiceUnavailableError,
}


class IsDayOffClient:
    """Fetches day types from isdayoff.ru."""

    def __init__(self, session: requests.Session, base_url: Optional[str] = None, timeout: float = 10.0):
        self.session = session
        self.base_url = (base_url or DEFAULT_URL).rstrip('/')
        self.timeout = timeout

    def fetch_day_type(self, day) -> DayType:
        """Return the type of `day`.

        Raises a DayTypeFetchError subclass when the service answers with an error.
        """
        url = f"{self.base_url}/{as_date(day).strftime(DAY_FORMAT)}"
        # pre=1 marks short days with code 2
        params = {"pre": "1"}
        logger.debug("GET %s %s", url, params)
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as ex:
            raise DayTypeFetchError(f"sending request to 'isdayoff' service: {ex}") from ex

        try:
            code = int(resp.text.strip())
        except ValueError:
            raise NonIntegerResponseError()

        status_class = resp.status_code // 100
        if status_class == 4:
            raise _CLIENT_ERRORS.get(code, UnknownResponseError)()
        if status_class == 5:
            raise ServiceUnavailableError()

        if code not in _DAY_TYPE_CODES:
            raise UnknownResponseError(f"service return unknown day type code {code}")
        return DayType(code)
