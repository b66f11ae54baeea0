from abc import ABC, abstractmethod

GETTERS = frozenset({
    "get_ai_provider",
    "get_gemini_apikey",
    "get_gemini_prompt",
    "get_deepseek_apikey",
    "get_deepseek_prompt",
    "get_openrouter_apikey",
    "get_openrouter_prompt",
    "get_openrouter_site_url",
    "get_openrouter_site_name",
})

SETTERS = frozenset("set_" + name[len("get_"):] for name in GETTERS)

RPC_FUNCTIONS = GETTERS | SETTERS


class BaseSettingsStore(ABC):
    """Contract for the remote key-value settings store."""

    @abstractmethod
    def call(self, function: str, value: str | None = None) -> str | None:
        """Invoke a settings RPC and return its scalar result.

        Getters take no argument. Setters take a single ``p_value`` argument
        and return ``None``.

        Raises:
            ValueError: if ``function`` is not a known settings RPC.
            SettingsStoreError: if the remote call fails.
        """

    def close(self) -> None:
        """Release transport resources held by the store."""

    @staticmethod
    def _check_function(function: str, value: str | None) -> None:
        if function not in RPC_FUNCTIONS:
            raise ValueError(f"Unknown settings function '{function}'")
        if function in SETTERS and value is None:
            raise ValueError(f"Settings function '{function}' requires a value")
        if function in GETTERS and value is not None:
            raise ValueError(f"Settings function '{function}' takes no value")
