"""Emission of x86-64 NASM assembly."""

from __future__ import annotations

from typing import TextIO, Union

from nosir.lexer import Token, TokenType

Operand = Union[Token, str]

DEFAULT_HEADER = (
    "global main\n"
    "extern ExitProcess\n"
    "section .bss\n"
    "section .data\n"
    "section .text\n"
)

SCRATCH_REGISTER = "r11"


def _pick(size: str | None, default: str) -> str:
    return default if size is None else size


class X86Generator:
    """Writes assembly text to a stream and tracks stack slots of variables."""

    def __init__(self, out: TextIO) -> None:
        self.out = out
        self.var_table: dict[str, int] = {}

    def calc_var_offset(self, offset: int) -> int:
        """Byte offset from rsp of the variable in slot ``offset``."""
        return offset * 8

    def resolve_ident(self, token: Token) -> str:
        """Memory operand for a variable, or "" (with a diagnostic) if unknown."""
        slot = self.var_table.get(token.value)
        if slot is None:
            print(
                f"Symbol not recognized. At line {token.loc.line}, "
                f"col {token.loc.column}"
            )
            return ""
        return f"[rsp+{self.calc_var_offset(slot)}]"

    def print_asm(self, text: str) -> None:
        """Write raw assembly text."""
        self.out.write(text)

    def print_default_header(self) -> None:
        """Write the fixed program prologue."""
        self.out.write(DEFAULT_HEADER)

    def _instruction(self, mnemonic: str, size: str, dest: str, src: str) -> None:
        prefix = f"{size} " if size else ""
        self.out.write(f"{mnemonic} {prefix}{dest}, {src}\n")

    def _operand(self, token: Token) -> str:
        if token.type is TokenType.IDENTIFIER:
            return self.resolve_ident(token)
        return token.value

    def print_mov(self, dest: Operand, src: Operand, size: str | None = None) -> None:
        """Emit a ``mov``; tokens are resolved to variables or literals.

        ``size`` overrides the operand size the operand kinds would pick.
        """
        if isinstance(dest, Token):
            if isinstance(src, Token):
                if src.type is TokenType.NUMBER:
                    self._instruction(
                        "mov", _pick(size, "qword"), self.resolve_ident(dest), src.value
                    )
                elif src.type is TokenType.IDENTIFIER:
                    self._instruction(
                        "mov", _pick(size, ""), SCRATCH_REGISTER, self.resolve_ident(src)
                    )
                    self._instruction(
                        "mov", _pick(size, ""), self.resolve_ident(dest), SCRATCH_REGISTER
                    )
            else:
                self._instruction("mov", _pick(size, "qword"), self.resolve_ident(dest), src)
        elif isinstance(src, Token):
            self._instruction("mov", _pick(size, "qword"), dest, self._operand(src))
        else:
            self._instruction("mov", _pick(size, "qword"), dest, src)

    def print_add_sub_mul(
        self, operation: str, dest: Operand, src: Operand, size: str | None = None
    ) -> None:
        """Emit an ``add``/``sub``/``imul``-style two-operand instruction."""
        width = _pick(size, "qword")
        if isinstance(dest, Token):
            if isinstance(src, Token):
                if src.type is TokenType.NUMBER:
                    self._instruction(operation, width, self.resolve_ident(dest), src.value)
                elif src.type is TokenType.IDENTIFIER:
                    self._instruction("mov", width, SCRATCH_REGISTER, self.resolve_ident(src))
                    self._instruction(
                        operation, width, self.resolve_ident(dest), SCRATCH_REGISTER
                    )
                    self._instruction("mov", width, self.resolve_ident(dest), SCRATCH_REGISTER)
            else:
                self._instruction(operation, width, self.resolve_ident(dest), src)
        elif isinstance(src, Token):
            self._instruction(operation, width, dest, self._operand(src))
        else:
            self._instruction(operation, width, dest, src)