"""Popularity check for modules about to be installed in secure mode."""

from __future__ import annotations

import math
from typing import Protocol, runtime_checkable

import httpx
import structlog

from depsync.core.config import DEFAULT_DOWNLOADS_URL, DEFAULT_POPULARITY_THRESHOLD
from depsync.exceptions import OracleError

log = structlog.get_logger("depsync.engine")


@runtime_checkable
class DownloadsOracle(Protocol):
    """Anything that can report last-month download counts for a module."""

    def get_downloads(self, name: str) -> float: ...


class NpmDownloadsClient:
    """Blocking client for the npm download-statistics API."""

    def __init__(
        self,
        base_url: str = DEFAULT_DOWNLOADS_URL,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(
            headers={"Accept": "application/json"},
            timeout=timeout,
        )

    # ── lifecycle ──────────────────────────────────────────────────────────

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> NpmDownloadsClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # ── public ─────────────────────────────────────────────────────────────

    def get_downloads(self, name: str) -> float:
        """Downloads of *name* over the trailing 30 days.

        Raises :class:`OracleError` for transport failures, non-2xx
        responses and bodies without a finite numeric ``downloads`` field.
        """
        url = f"{self._base_url}/{name}"
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise OracleError(f"download stats unavailable for {name}: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise OracleError(f"download stats for {name} are not JSON") from exc

        downloads = data.get("downloads") if isinstance(data, dict) else None
        # bool is an int subclass; reject it explicitly
        if isinstance(downloads, bool) or not isinstance(downloads, (int, float)):
            raise OracleError(f"download stats for {name} lack a numeric 'downloads' field")
        # json accepts NaN and Infinity
        if isinstance(downloads, float) and not math.isfinite(downloads):
            raise OracleError(f"download stats for {name} have a non-finite 'downloads' field")
        return downloads


class TrustGate:
    """Allow an install only for modules above the popularity threshold.

    Fails closed: any error raised by the oracle means "not trusted".
    """

    def __init__(
        self,
        oracle: DownloadsOracle,
        threshold: int = DEFAULT_POPULARITY_THRESHOLD,
    ) -> None:
        self._oracle = oracle
        self.threshold = threshold

    def is_trusted(self, name: str) -> bool:
        try:
            downloads = self._oracle.get_downloads(name)
        except OracleError as exc:
            log.warning("trust.oracle_failed", module=name, error=str(exc))
            return False
        except Exception:
            log.warning("trust.oracle_error", module=name, exc_info=True)
            return False

        trusted = downloads > self.threshold
        log.info(
            "trust.checked",
            module=name,
            downloads=downloads,
            threshold=self.threshold,
            trusted=trusted,
        )
        return trusted
