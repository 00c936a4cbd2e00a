from ysstorage.registers import RegistersValue
from ysstorage.syscall import Syscall, SyscallArgs


def test_unknown_numbers():
    assert Syscall(12345) is Syscall.UNKNOWN
    assert Syscall(60) is Syscall.EXIT


def test_from_registers():
    args = SyscallArgs.from_registers(RegistersValue(rax=1, rdi=2, rsi=3, rdx=4))
    assert args == SyscallArgs(Syscall.WRITE, 2, 3, 4)


def test_str():
    args = SyscallArgs(Syscall.GET_PID, 0, 0, 0)
    text = str(args)
    assert text.startswith("SYSCALL: GetPid     (0x")
    assert text.count("0x0000000000000000") == 3