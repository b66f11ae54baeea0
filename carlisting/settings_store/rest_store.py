import httpx

from carlisting.settings_store.base import SETTERS, BaseSettingsStore
from carlisting.settings_store.exceptions import SettingsStoreError


class SupabaseSettingsStore(BaseSettingsStore):
    """Calls the settings functions through the hosted REST RPC endpoint."""

    def __init__(
        self,
        *,
        url: str,
        api_key: str,
        timeout_seconds: int,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        base_url = url.strip().rstrip("/")
        if not base_url:
            raise ValueError("supabase_url is required for settings_store=supabase")
        self._client = httpx.Client(
            base_url=f"{base_url}/rest/v1",
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout_seconds,
            transport=transport,
        )

    def call(self, function: str, value: str | None = None) -> str | None:
        self._check_function(function, value)
        payload = {"p_value": value} if function in SETTERS else {}
        try:
            response = self._client.post(f"/rpc/{function}", json=payload)
        except httpx.HTTPError as exc:
            raise SettingsStoreError(f"Settings call {function} failed: {exc}") from exc

        if response.is_error:
            raise SettingsStoreError(
                f"Settings call {function} failed: {self._error_message(response)}"
            )
        if function in SETTERS or not response.content:
            return None
        try:
            result = response.json()
        except ValueError as exc:
            raise SettingsStoreError(
                f"Settings call {function} returned invalid JSON: {exc}"
            ) from exc
        return None if result is None else str(result)

    def close(self) -> None:
        self._client.close()

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return f"HTTP {response.status_code}"
