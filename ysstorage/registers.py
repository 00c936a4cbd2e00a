"""The general purpose registers saved on an interrupt."""

from __future__ import annotations

from dataclasses import dataclass

_ROWS = (
    ("r15", "r14", "r13"),
    ("r12", "r11", "r10"),
    ("r9", "r8", "rdi"),
    ("rsi", "rdx", "rcx"),
    ("rbx", "rax", "rbp"),
)


@dataclass
class RegistersValue:
    r15: int = 0
    r14: int = 0
    r13: int = 0
    r12: int = 0
    r11: int = 0
    r10: int = 0
    r9: int = 0
    r8: int = 0
    rdi: int = 0
    rsi: int = 0
    rdx: int = 0
    rcx: int = 0
    rbx: int = 0
    rax: int = 0
    rbp: int = 0

    def __str__(self) -> str:
        lines = [
            ", ".join(f"{name:<3}: 0x{getattr(self, name):016x}" for name in row)
            for row in _ROWS
        ]
        return "Registers\n" + ",\n".join(lines)