"""Exception hierarchy for Headerscope."""


class HeaderscopeError(Exception):
    """Base class for all Headerscope errors."""


class MalformedDocumentError(HeaderscopeError):
    """Raised when a process definition has no usable process node.

    Fatal for the artifact being extracted; other artifacts in the same
    batch are unaffected.
    """


class ArchiveError(HeaderscopeError):
    """Raised when an artifact archive cannot be read."""


class AuthenticationError(HeaderscopeError):
    """Raised when an OAuth2 token cannot be obtained."""


class DownloadError(HeaderscopeError):
    """Raised when an artifact download fails."""


class ConfigurationError(HeaderscopeError):
    """Raised when required settings are missing."""


class ReportExportError(HeaderscopeError):
    """Raised when the Excel report cannot be written."""
