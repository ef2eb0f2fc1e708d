"""Contains exceptions raised when reconciling application configuration."""


class InvalidEndpointError(Exception):
    """Raised when a node endpoint is not an HTTP(S) URL."""

    def __init__(self, name: str, cli_name: str, env_name: str, value: str) -> None:
        """Initializes the exception with the name of the offending element."""
        super().__init__(f"Invalid {name} '{value}' (command line option {cli_name}, environment variable {env_name}): expected an http:// or https:// URL")
        self.name = name
        self.cli_name = cli_name
        self.env_name = env_name
        self.value = value


class InvalidSyncSettingError(Exception):
    """Raised when a numeric sync setting is out of range."""

    pass
