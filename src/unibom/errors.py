"""Exceptions raised by unibom."""

from __future__ import annotations

from unibom.enums import ExitStatus


class BomError(Exception):
    """Base class for all unibom errors.

    :attr:`exit_status` is the status the ``bom`` command exits with when
    the error reaches it.
    """

    exit_status: ExitStatus = ExitStatus.FAILURE


class UnknownTypeError(BomError, LookupError):
    """A BOM type name is not in the catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(f'unknown BOM type "{name}"')
        self.name = name


class UnexpectedBomTypeError(BomError):
    """The detected BOM type is not one of the expected types."""

    exit_status = ExitStatus.EXPECT_FAIL

    def __init__(self, bom_name: str) -> None:
        super().__init__(f"unexpected BOM type {bom_name}")
        self.bom_name = bom_name


class IllegalBytesError(BomError):
    """Strict conversion hit an invalid or truncated byte sequence."""

    exit_status = ExitStatus.ILLEGAL_BYTES

    def __init__(self, bom_name: str, offset: int) -> None:
        super().__init__(f"invalid {bom_name} byte sequence at file offset {offset}")
        self.bom_name = bom_name
        self.offset = offset


class ConversionError(BomError):
    """The conversion service failed for a reason other than bad input."""


class InternalError(BomError):
    """An internal invariant was violated."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"internal error: {detail}")
        self.detail = detail
