"""Exception hierarchy for VRT packet handling."""


class VitaError(Exception):
    """Base class for every error raised by this package."""


class CommandOnlyError(VitaError):
    """An operation valid only for command packets was used on another type."""

    def __init__(self, message: str = "operation is only valid for command packets") -> None:
        super().__init__(message)


class SignalDataOnlyError(VitaError):
    """An operation valid only for signal data packets was used on another type."""

    def __init__(
        self, message: str = "operation is only valid for signal data packets"
    ) -> None:
        super().__init__(message)


class ContextOnlyError(VitaError):
    """An operation valid only for context packets was used on another type."""

    def __init__(self, message: str = "operation is only valid for context packets") -> None:
        super().__init__(message)


class OutOfRangeError(VitaError, ValueError):
    """A value lies outside the range the field allows."""

    def __init__(self, message: str = "value is out of range for this field") -> None:
        super().__init__(message)


class ReservedFieldError(VitaError, ValueError):
    """A reserved value was given for a field."""

    def __init__(self, message: str = "reserved values may not be set") -> None:
        super().__init__(message)


class TimestampModeMismatchError(VitaError, ValueError):
    """A timestamp and its mode do not agree."""

    def __init__(
        self, message: str = "timestamp presence does not match the timestamp mode"
    ) -> None:
        super().__init__(message)


class PayloadUneven32BitWordsError(VitaError, ValueError):
    """A payload was given whose length is not a multiple of four bytes."""

    def __init__(
        self, message: str = "payload length must be a multiple of 4 bytes"
    ) -> None:
        super().__init__(message)


class ParseError(VitaError, ValueError):
    """Binary data could not be decoded."""