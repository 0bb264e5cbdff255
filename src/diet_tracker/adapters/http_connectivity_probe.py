"""HTTP probe for remote store reachability."""

from dataclasses import dataclass

import httpx

from diet_tracker.services.connectivity import ConnectivityProbe


@dataclass
class HttpxConnectivityProbe(ConnectivityProbe):
    """Treats any non-5xx answer from the health URL as online."""

    url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 5.0

    @classmethod
    def create(cls, supabase_url: str, api_key: str) -> "HttpxConnectivityProbe":
        """Create a probe against the Supabase Auth health endpoint."""
        return cls(
            url=f"{supabase_url.rstrip('/')}/auth/v1/health",
            http_client=httpx.AsyncClient(headers={"apikey": api_key}),
        )

    async def check(self) -> bool:
        """Return True when the endpoint answers without a server error."""
        try:
            response = await self.http_client.get(
                self.url, timeout=self.timeout_seconds
            )
        except httpx.HTTPError:
            return False
        return response.status_code < httpx.codes.INTERNAL_SERVER_ERROR

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
