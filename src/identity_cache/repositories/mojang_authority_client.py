"""Mojang API implementation of RemoteAuthority.

Endpoints used:
- ``POST /profiles/minecraft`` with a JSON array of names, answered with
  ``[{"id": "<32 hex>", "name": "<case preserved>"}, ...]``. Unknown names are
  omitted from the answer.
- ``GET /user/profiles/<32 hex>/names``, answered with the name history,
  oldest first; every entry but the original carries ``changedToAt``
  (milliseconds since the epoch). ``204 No Content`` means unknown.

The API is rate limited, so this client never retries on its own.
"""

from typing import Any
from uuid import UUID

import httpx

from identity_cache.config import settings
from identity_cache.exceptions import AuthorityError
from identity_cache.utils import undashed


class MojangAuthorityClient:
    """Mojang implementation of the RemoteAuthority protocol.

    This class satisfies the RemoteAuthority protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        authority = MojangAuthorityClient.create()
        ids = authority.lookup_identifiers_by_names(["Notch"])
        print(ids)  # {"Notch": UUID("069a79f4-44e9-4726-a5be-fca90e38aaf5")}
        ```
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        batch_size: int | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the Mojang authority client.

        Args:
            base_url: API base URL. Defaults to settings.authority_api_url.
            timeout: Request timeout in seconds. Defaults to settings.authority_timeout.
            batch_size: Maximum names per profile request.
                        Defaults to settings.authority_batch_size.
            client: Preconfigured httpx client (mainly for tests).
        """
        self._base_url = (base_url or settings.authority_api_url).rstrip("/")
        self._timeout = timeout or settings.authority_timeout
        self._batch_size = batch_size or settings.authority_batch_size
        self._client = client

    @classmethod
    def create(
        cls,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> "MojangAuthorityClient":
        """Factory method to create MojangAuthorityClient with defaults.

        Args:
            base_url: API base URL. If None, uses settings.
            timeout: Request timeout. If None, uses settings.

        Returns:
            Configured MojangAuthorityClient
        """
        return cls(base_url=base_url, timeout=timeout)

    @property
    def client(self) -> httpx.Client:
        """Lazy-load the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                timeout=self._timeout,
                headers={"Accept": "application/json"},
            )
        return self._client

    def lookup_identifiers_by_names(self, names: list[str]) -> dict[str, UUID]:
        """Resolve names to identifiers, in chunks of ``batch_size``.

        Args:
            names: Names to resolve

        Returns:
            Mapping of case-preserved name to identifier

        Raises:
            AuthorityError: On transport, status or payload errors
        """
        pending = list(dict.fromkeys(names))
        resolved: dict[str, UUID] = {}

        for start in range(0, len(pending), self._batch_size):
            chunk = pending[start : start + self._batch_size]
            profiles = self._request("POST", "/profiles/minecraft", json=chunk) or []
            try:
                for profile in profiles:
                    resolved[profile["name"]] = UUID(hex=profile["id"])
            except (KeyError, TypeError, ValueError) as e:
                raise AuthorityError(f"Malformed profile response for {chunk}: {e}") from e

        return resolved

    def lookup_name_history(self, identifier: UUID) -> list[str]:
        """Fetch the name history of an identifier, most recent first.

        Args:
            identifier: The identifier to look up

        Returns:
            Historical names, most recent first; empty if unknown

        Raises:
            AuthorityError: On transport, status or payload errors
        """
        history = self._request("GET", f"/user/profiles/{undashed(identifier)}/names") or []
        try:
            ordered = sorted(
                history,
                key=lambda change: change.get("changedToAt", 0),
                reverse=True,
            )
            return [change["name"] for change in ordered]
        except (AttributeError, KeyError, TypeError) as e:
            raise AuthorityError(f"Malformed name history for {identifier}: {e}") from e

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send one request and decode its JSON body.

        Returns:
            Decoded JSON, or None for an empty / 204 response
        """
        url = f"{self._base_url}{path}"
        try:
            response = self.client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise AuthorityError(f"{method} {url} failed: {e}") from e

        if response.status_code == httpx.codes.NO_CONTENT or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise AuthorityError(f"{method} {url} returned invalid JSON: {e}") from e

    def close(self) -> None:
        """Close the HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            self._client.close()
            self._client = None
