class ProviderError(Exception):
    """Raised by provider clients on transport failures and unusable responses."""

    def __init__(self, provider: str, message: str, status_code=None):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.status_code = status_code
