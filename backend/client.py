#Purpose: The backend-as-a-service "adapter/client".
#Sole responsibility: talk to the hosted backend over HTTP and return decoded JSON.
#Encapsulates backend-specific details:
#REST table URLs (/rest/v1/<table>) and edge function URLs (/functions/v1/<name>)
#api key headers
#equality filter encoding (column=eq.value)
#timeouts and error handling
#It should not contain dispatch rules or scoring.

from dotenv import load_dotenv
import logging
import os
from typing import Any, Dict, List, Optional
import requests

# Read backend settings from environment
# Example in .env:
# SUPABASE_URL=https://<project>.supabase.co
# SUPABASE_ANON_KEY=<public anon key>
# BACKEND_TIMEOUT=10
load_dotenv()

logger = logging.getLogger(__name__)

Filters = Dict[str, Any]


class BackendError(Exception):
    """Raised when the backend can't be reached or answers with an error."""
    pass


class BackendClient:
    """
    Backend Adapter / Client

    Sole responsibility:
    - Talk to the backend's REST + functions endpoints via HTTP
    - Turn transport failures and error statuses into BackendError
    - Return decoded JSON

    Constructed explicitly and passed to whoever needs it; there is no
    module-level shared instance.
    """
    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or os.getenv("SUPABASE_URL") or "").rstrip("/")
        self.api_key = api_key or os.getenv("SUPABASE_ANON_KEY")
        self.timeout = timeout if timeout is not None else float(os.getenv("BACKEND_TIMEOUT", "10"))
        self.session = session or requests.Session()

        if not self.base_url:
            raise ValueError("Backend URL not set. Please set SUPABASE_URL in the .env file.")
        if not self.api_key:
            raise ValueError("Backend API key not set. Please set SUPABASE_ANON_KEY in the .env file.")

    #----------------
    # Internal helpers
    #----------------
    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    @staticmethod
    def format_filters(filters: Optional[Filters]) -> Dict[str, str]:
        """Convert {"order_id": 7, "delivery_agent_id": None} to PostgREST form {"order_id": "eq.7", "delivery_agent_id": "is.null"}"""
        if not filters:
            return {}
        return {
            column: "is.null" if value is None else f"eq.{value}"
            for column, value in filters.items()
        }

    def _request(self, method: str, url: str, extra_headers: Optional[Dict[str, str]] = None, **kwargs) -> Any:
        headers = self._headers()
        if extra_headers:
            headers.update(extra_headers)

        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                timeout=self.timeout,
                **kwargs,
            )
        except requests.RequestException as exc:
            raise BackendError(f"{method} {url} failed: {exc}") from exc

        if response.status_code >= 400:
            raise BackendError(f"{method} {url} returned {response.status_code}: {self._error_message(response)}")

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise BackendError(f"{method} {url} returned invalid JSON") from exc

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return response.text or "Unknown error"
        if isinstance(data, dict):
            return data.get("message") or data.get("error") or "Unknown error"
        return str(data)

    #----------------
    # Public methods
    #----------------
    def select(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Filters] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Read rows from a table.

        `columns` uses the backend's select syntax, embeds included,
        e.g. "restaurant_id, restaurants(latitude, longitude, name)".
        """
        params = {"select": columns}
        params.update(self.format_filters(filters))
        if limit is not None:
            params["limit"] = str(limit)

        rows = self._request("GET", f"{self.base_url}/rest/v1/{table}", params=params)
        return rows or []

    def update(self, table: str, values: Dict[str, Any], filters: Filters) -> None:
        """
        Patch the rows matching `filters`. Refuses to run without filters.
        """
        if not filters:
            raise ValueError("update() needs at least one filter, refusing to patch a whole table.")

        logger.debug("PATCH %s where %s", table, filters)
        self._request(
            "PATCH",
            f"{self.base_url}/rest/v1/{table}",
            params=self.format_filters(filters),
            json=values,
            extra_headers={"Prefer": "return=minimal"},
        )

    def invoke(self, function_name: str, body: Optional[Dict[str, Any]] = None) -> Any:
        """
        Call an edge function and return its JSON payload.
        """
        return self._request("POST", f"{self.base_url}/functions/v1/{function_name}", json=body or {})
