"""Exception taxonomy for collaborator failures."""


class InsureBotError(Exception):
    """Base class for recoverable InsureBot errors."""


class UpstreamError(InsureBotError):
    """The language-model call failed, returned nothing, or returned garbage."""


class ExtractionError(InsureBotError):
    """The submitted documents could not be turned into an extracted record."""


class TransportError(InsureBotError):
    """The message transport failed to receive or deliver."""
