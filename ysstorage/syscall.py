"""System call numbers and decoded call arguments."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .registers import RegistersValue


class Syscall(IntEnum):
    READ = 0
    WRITE = 1
    GET_PID = 39
    SPAWN = 59
    EXIT = 60
    WAIT_PID = 61
    LIST_APP = 65531
    STAT = 65532
    ALLOCATE = 65533
    DEALLOCATE = 65534
    UNKNOWN = 65535

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN

    @property
    def display_name(self) -> str:
        return "".join(part.capitalize() for part in self.name.split("_"))


@dataclass(frozen=True)
class SyscallArgs:
    syscall: Syscall
    arg0: int
    arg1: int
    arg2: int

    @classmethod
    def from_registers(cls, regs: RegistersValue) -> "SyscallArgs":
        return cls(Syscall(regs.rax), regs.rdi, regs.rsi, regs.rdx)

    def __str__(self) -> str:
        return (
            f"SYSCALL: {self.syscall.display_name:<10} "
            f"(0x{self.arg0:016x}, 0x{self.arg1:016x}, 0x{self.arg2:016x})"
        )