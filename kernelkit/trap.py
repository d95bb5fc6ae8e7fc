"""Decoding of the AArch64 exception syndrome and dispatch of traps."""

import enum
import operator
from dataclasses import dataclass
from typing import Optional

ESR_EC_SHIFT = 26
ESR_ISS_MASK = 0xFFFFFF
ESR_IR_MASK = 1 << 25

SPSR_EL1_DAIF_MASK = 0xF

_U64_MASK = (1 << 64) - 1


class ExceptionClass(enum.IntEnum):
    """Exception classes the trap handler knows about."""

    UNKNOWN = 0x00
    SVC64 = 0x15
    IABORT_EL0 = 0x20
    IABORT_EL1 = 0x21
    DABORT_EL0 = 0x24
    DABORT_EL1 = 0x25


class TrapAction(enum.Enum):
    """What the global trap handler does with an exception."""

    INTERRUPT = "interrupt"
    SYSCALL = "syscall"
    PAGE_FAULT = "page_fault"


class UnknownException(Exception):
    """Raised for an exception syndrome the trap handler cannot service."""

    def __init__(self, esr: int):
        super().__init__(f"unknown exception {esr}")
        self.esr = esr


@dataclass(frozen=True)
class Syndrome:
    """Fields of an Exception Syndrome Register value."""

    esr: int
    ec: int
    iss: int
    ir: bool

    @property
    def exception_class(self) -> Optional[ExceptionClass]:
        """The known exception class, or None if it is not one of them."""
        try:
            return ExceptionClass(self.ec)
        except ValueError:
            return None


def decode_esr(esr: int) -> Syndrome:
    """Split an ESR value into class, syndrome and the IR bit."""
    esr = operator.index(esr)
    if not 0 <= esr <= _U64_MASK:
        raise ValueError(f"{esr:#x} is not a 64-bit unsigned value")
    return Syndrome(
        esr=esr,
        ec=esr >> ESR_EC_SHIFT,
        iss=esr & ESR_ISS_MASK,
        ir=bool(esr & ESR_IR_MASK),
    )


_ACTIONS = {
    ExceptionClass.SVC64: TrapAction.SYSCALL,
    ExceptionClass.IABORT_EL0: TrapAction.PAGE_FAULT,
    ExceptionClass.IABORT_EL1: TrapAction.PAGE_FAULT,
    ExceptionClass.DABORT_EL0: TrapAction.PAGE_FAULT,
    ExceptionClass.DABORT_EL1: TrapAction.PAGE_FAULT,
}


def classify(esr: int) -> TrapAction:
    """Return how an exception with syndrome ``esr`` is handled.

    Raises UnknownException where the handler would panic.
    """
    syndrome = decode_esr(esr)
    ec = syndrome.exception_class
    if ec is ExceptionClass.UNKNOWN:
        if syndrome.ir:
            raise UnknownException(syndrome.esr)
        return TrapAction.INTERRUPT
    if ec is None:
        raise UnknownException(syndrome.esr)
    return _ACTIONS[ec]