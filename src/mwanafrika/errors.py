"""Exceptions shared across the service layers."""


class MissingCredentialsError(RuntimeError):
    """A provider credential is absent or still a placeholder value."""


class UpstreamError(RuntimeError):
    """The generative or places provider failed.

    Args:
        message: Provider error message.
        status: HTTP status returned by the provider, when known.
    """

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status

    @property
    def quota_exceeded(self) -> bool:
        text = str(self)
        return self.status == 429 or "quota" in text or "Too Many Requests" in text


class InsufficientCoinsError(ValueError):
    """A debit exceeds the profile's coin balance."""


class ProfileNotFoundError(LookupError):
    pass


class QuestNotFoundError(LookupError):
    pass


class RewardNotFoundError(LookupError):
    pass


class ContentParseError(ValueError):
    """The model's output could not be parsed as JSON.

    Args:
        message: Parser error message.
        raw_response: The unparsed model output.
    """

    def __init__(self, message: str, raw_response: str):
        super().__init__(message)
        self.raw_response = raw_response
