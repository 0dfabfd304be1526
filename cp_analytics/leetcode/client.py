"""
Client for the public alfa-leetcode-api statistics service.

Every method returns the decoded JSON payload unchanged; the views wrap it in
the API envelope. ``analytics()`` fans out to several endpoints at once and
degrades individual failures to ``None``.
"""
from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from urllib.parse import quote

import requests

from .rate_limiter import get_host_limiter

logger = logging.getLogger(__name__)

# Sections of the combined analytics payload: (key, endpoint suffix, params)
ANALYTICS_SECTIONS = (
    ('profile', '', None),
    ('solved', '/solved', None),
    ('badges', '/badges', None),
    ('contest', '/contest', None),
    ('acSubmissions', '/acSubmission', {'limit': 50}),
    ('skills', '/skill', None),
    ('languages', '/language', None),
    ('progress', '/progress', None),
)


class LeetCodeAPIError(Exception):
    """The upstream API could not be reached or returned an error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class LeetCodeClient:
    """Thin ``requests`` wrapper with rate limiting and retry.

    Args:
        base_url: API root, e.g. ``https://alfa-leetcode-api.onrender.com``.
        timeout: Per-request timeout in seconds.
        rate_limit: Minimum seconds between requests to the same host.
        max_retries: Attempts per request; only network errors and 5xx
            responses are retried.
        session: Optional pre-built ``requests.Session``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 15,
        rate_limit: float = 0.2,
        max_retries: int = 2,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.rate_limiter = get_host_limiter(self.base_url, rate_limit)
        self.session = session or self._create_session()

    @classmethod
    def from_config(cls, config) -> LeetCodeClient:
        return cls(
            config['LEETCODE_API_BASE'],
            timeout=config.get('LEETCODE_TIMEOUT', 15),
            rate_limit=config.get('LEETCODE_RATE_LIMIT', 0.2),
            max_retries=config.get('LEETCODE_MAX_RETRIES', 2),
        )

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update({
            'Accept': 'application/json',
            'User-Agent': 'cp-analytics/1.0',
        })
        return session

    def _request_with_retry(self, url, params=None):
        for attempt in range(self.max_retries):
            try:
                self.rate_limiter.wait()
                resp = self.session.request(
                    'GET', url, params=params, timeout=self.timeout
                )
                resp.raise_for_status()
                return resp
            except requests.HTTPError as e:
                status = e.response.status_code if e.response is not None else None
                reason = e.response.reason if e.response is not None else str(e)
                if status is not None and status < 500:
                    raise LeetCodeAPIError(f'LeetCode API error: {reason}', status)
                logger.warning(
                    f'LeetCode request failed (attempt {attempt + 1}/{self.max_retries}): {e}'
                )
                if attempt == self.max_retries - 1:
                    raise LeetCodeAPIError(f'LeetCode API error: {reason}', status)
            except requests.RequestException as e:
                logger.warning(
                    f'LeetCode request failed (attempt {attempt + 1}/{self.max_retries}): {e}'
                )
                if attempt == self.max_retries - 1:
                    raise LeetCodeAPIError(f'Failed to fetch LeetCode data: {e}')
            time.sleep(2 ** attempt)

    def fetch(self, username: str, endpoint: str = '', params: dict | None = None):
        """GET ``/<username><endpoint>`` and return the decoded JSON."""
        if not username or not username.strip():
            raise LeetCodeAPIError('LeetCode username is required', 400)
        url = f'{self.base_url}/{quote(username.strip(), safe="")}{endpoint}'
        resp = self._request_with_retry(url, params=params)
        try:
            return resp.json()
        except ValueError as e:
            raise LeetCodeAPIError(f'Failed to fetch LeetCode data: invalid JSON ({e})')

    def profile(self, username):
        return self.fetch(username)

    def full_profile(self, username):
        return self.fetch(username, '/profile')

    def badges(self, username):
        return self.fetch(username, '/badges')

    def solved(self, username):
        return self.fetch(username, '/solved')

    def contest(self, username):
        return self.fetch(username, '/contest')

    def contest_history(self, username):
        return self.fetch(username, '/contest/history')

    def submissions(self, username, limit=20):
        return self.fetch(username, '/submission', {'limit': limit})

    def ac_submissions(self, username, limit=20):
        return self.fetch(username, '/acSubmission', {'limit': limit})

    def calendar(self, username, year=None):
        return self.fetch(username, '/calendar', {'year': year or datetime.utcnow().year})

    def skills(self, username):
        return self.fetch(username, '/skill')

    def languages(self, username):
        return self.fetch(username, '/language')

    def progress(self, username):
        return self.fetch(username, '/progress')

    def _fetch_or_none(self, username, endpoint, params):
        try:
            return self.fetch(username, endpoint, params)
        except LeetCodeAPIError as e:
            logger.warning(f'LeetCode analytics section {endpoint or "/"} failed: {e}')
            return None

    def analytics(self, username) -> dict:
        """Fetch every section of ``ANALYTICS_SECTIONS`` concurrently.

        Returns:
            Dict keyed by section name; a section whose request failed is
            ``None`` rather than failing the whole payload.
        """
        with ThreadPoolExecutor(max_workers=len(ANALYTICS_SECTIONS)) as executor:
            futures = {
                key: executor.submit(self._fetch_or_none, username, endpoint, params)
                for key, endpoint, params in ANALYTICS_SECTIONS
            }
            return {key: future.result() for key, future in futures.items()}
