"""Statement parser that drives assembly generation for NIR programs."""

from __future__ import annotations

from typing import Iterable, Sequence, TextIO

from nosir.generator import X86Generator
from nosir.lexer import Lexer, Token, TokenType

_STATEMENT_END = frozenset({TokenType.LBRACE, TokenType.RBRACE, TokenType.SEMICOLON})

_ARITHMETIC = {
    TokenType.PLUS: "add",
    TokenType.MINUS: "sub",
    TokenType.MULT: "imul",
}

_NO_DEST = Token(TokenType.EOF)


def _kind(statement: Sequence[Token], index: int) -> TokenType:
    """Type of the token at ``index``, or EMPTY past the end of the statement."""
    if 0 <= index < len(statement):
        return statement[index].type
    return TokenType.EMPTY


class Parser:
    """Reads statements from source lines and writes assembly to ``out``."""

    def __init__(self, source: Iterable[str], out: TextIO) -> None:
        self.lex = Lexer(source)
        self.gen = X86Generator(out)
        self.var_count = 0

    def get_statement(self) -> list[Token]:
        """Collect tokens up to and including the next ``{``, ``}`` or ``;``."""
        statement: list[Token] = []
        token = self.lex.next_token()
        while token.type is not TokenType.EOF:
            statement.append(token)
            if token.type in _STATEMENT_END:
                break
            token = self.lex.next_token()
        return statement

    def _statements(self):
        statement = self.get_statement()
        while statement:
            yield statement
            statement = self.get_statement()

    def parse(self) -> None:
        """Write the header and translate every statement of the input."""
        self.gen.print_default_header()
        for statement in self._statements():
            self.parse_statement(statement)

    def parse_statement(self, statement: Sequence[Token]) -> bool:
        """Translate one statement; return False if it was rejected."""
        kind = _kind(statement, 0)
        if kind is TokenType.DEFINE:
            return self.parse_function_def(statement)
        if kind is TokenType.LET:
            return self.parse_var_def(statement)
        if kind is TokenType.IDENTIFIER:
            return self.parse_function_call(statement) or self.parse_var_assign(statement)
        if kind is TokenType.EXIT:
            return self.parse_exit(statement)
        return True

    def parse_function_def(self, statement: Sequence[Token]) -> bool:
        """Translate ``def name(...) {`` and the body up to its closing brace."""
        if _kind(statement, 1) is not TokenType.IDENTIFIER:
            print('Expected identifier after "def"')
            return False
        if _kind(statement, 2) is not TokenType.LPAREN:
            print('Expected "("')
            return False

        close = next(
            (i for i in range(3, len(statement)) if statement[i].type is TokenType.RPAREN),
            None,
        )
        if close is None:
            print('Expected ")"')
            return False

        brace = close + 1 if close + 1 < len(statement) else close
        if statement[brace].type is not TokenType.LBRACE:
            print('Expected "{"')
            return False

        name = statement[1].value
        self.gen.print_asm(name + ":\n")
        if name == "main":
            self.gen.print_asm("sub rsp, 360\n")

        for inner in self._statements():
            if inner[-1].type is TokenType.RBRACE:
                return True
            self.parse_statement(inner)

        print('Expected "}"')
        return False

    def parse_var_def(self, statement: Sequence[Token]) -> bool:
        """Translate ``let name;`` or ``let name = expr;``."""
        if _kind(statement, 1) is not TokenType.IDENTIFIER:
            print('Expected identifier after "let"')
            return False
        name = statement[1].value
        if name in self.gen.var_table:
            print(f'"{name}" is already defined')
            return False
        if _kind(statement, 2) is TokenType.SEMICOLON:
            self.gen.var_table[name] = self.var_count
            self.var_count += 1
            return True
        if _kind(statement, 2) is not TokenType.EQUALS:
            print('Expected "="')
            return False

        self.gen.var_table[name] = self.var_count
        self.compile_expr(list(statement[3:-1]), "", statement[1])
        self.var_count += 1
        return True

    def parse_function_call(self, statement: Sequence[Token]) -> bool:
        """Translate ``name()``; return False if the statement is not a call."""
        if _kind(statement, 1) is not TokenType.LPAREN:
            return False
        if _kind(statement, 2) is not TokenType.RPAREN:
            return False
        self.gen.print_asm("call " + statement[0].value)
        return True

    def parse_var_assign(self, statement: Sequence[Token]) -> bool:
        """Translate ``name = expr;``."""
        if _kind(statement, 1) is TokenType.SEMICOLON:
            print("Not a statement")
            return False
        if _kind(statement, 1) is not TokenType.EQUALS:
            print('Expected "="')
            return False
        self.compile_expr(list(statement[2:-1]), "", statement[0])
        self.var_count += 1
        return True

    def compile_expr(self, expr: Sequence[Token], x86_dest: str, dest: Token) -> bool:
        """Store ``expr`` into the register ``x86_dest`` or, if empty, variable ``dest``.

        Only single operands and ``left OPERATOR right`` are supported.
        """
        if len(expr) == 1:
            if x86_dest:
                self.gen.print_mov(x86_dest, expr[0])
            else:
                self.gen.print_mov(dest, expr[0])
            return True
        if len(expr) > 3:
            print("ONLY 3 Operator expr supported: left OPERATOR right", end="")
            return False
        if len(expr) != 3:
            print("Incomplete expression")
            return False
        operation = _ARITHMETIC.get(expr[1].type)
        if operation is not None:
            self.compile_arith(expr[0], expr[2], x86_dest, dest, operation)
        return True

    def compile_arith(
        self, left: Token, right: Token, x86_dest: str, dest: Token, operation: str
    ) -> bool:
        """Emit ``left operation right`` through rdx and store the result."""
        self.gen.print_mov("rdx", left)
        self.gen.print_add_sub_mul(operation, "rdx", right)
        if x86_dest:
            self.gen.print_mov(x86_dest, "rdx", "qword")
        else:
            self.gen.print_mov(dest, "rdx")
        return True

    def parse_exit(self, statement: Sequence[Token]) -> bool:
        """Translate ``exit expr;`` into a call of ExitProcess."""
        self.compile_expr(list(statement[1:-1]), "rcx", _NO_DEST)
        self.gen.print_asm("call ExitProcess\n")
        return True