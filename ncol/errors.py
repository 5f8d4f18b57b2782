"""
Error types for ncol.

Every failure that should end a run derives from NcolError so the CLI
can report it and exit non-zero.
"""


class NcolError(Exception):
    """Base class for all ncol errors."""


class ConfigurationError(NcolError):
    """Missing or invalid configuration (e.g. no niri socket path)."""


class TransportError(NcolError):
    """Failure on the stream to the compositor."""


class ConnectError(TransportError):
    """The compositor socket does not exist or refused the connection."""


class ProtocolError(TransportError):
    """A request could not be sent or its reply could not be read or decoded."""


class SemanticError(NcolError):
    """The compositor answered, but not with what was asked for."""
