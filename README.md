# nosir

`nosir` compiles source files written in the small Nos IR language (`.nir`)
into x86-64 assembly in NASM syntax. The output calls `ExitProcess`, so it is
meant to be assembled and linked for Windows.

## Installation

```
pip install .
```

## Usage

```
nosir program.nir
```

The command prints the time it started, compiles the file, and prints the
time it finished and how many seconds it took. The assembly is always written
to `default.asm` in the current directory.

The command prints a message and compiles nothing when no file is given, when
more than one argument is given, or when the file name does not contain
`.nir`. If the source cannot be read or the output cannot be written, it
prints `Cannot compile ...` and exits with status 1.

Problems found in the program itself (an unknown variable, a missing `)`, a
variable defined twice, an expression that is too long) are printed as
messages while compiling; compiling goes on with the next statement.

## The language

Statements end with `;`. Blocks are wrapped in `{` and `}`.

```
def main() {
    let a = 5;
    let b = a + 3;
    b = b * 2;
    exit b;
}
```

- `def name() { ... }` defines a function, which becomes a label in the
  output. The function named `main` also reserves 360 bytes of stack
  (`sub rsp, 360`).
- `let name;` and `let name = expr;` declare a variable. Each variable gets
  its own eight-byte slot on the stack, addressed as `[rsp+N]`.
- `name = expr;` assigns to a variable.
- `name();` calls a function.
- `exit expr;` moves the value of `expr` into `rcx` and calls `ExitProcess`.

An expression is a single number or identifier, or two of them joined by
`+`, `-` or `*` (emitted as `add`, `sub` and `imul` through `rdx`). Longer
expressions are rejected with a message.

## Using it from Python

```python
import io

from nosir.parser import Parser

source = io.StringIO("def main() {\n let a = 5;\n exit a;\n}\n")
output = io.StringIO()
Parser(source, output).parse()
print(output.getvalue())
```

prints

```
global main
extern ExitProcess
section .bss
section .data
section .text
main:
sub rsp, 360
mov qword [rsp+0], 5
mov qword rcx, [rsp+0]
call ExitProcess
```

The modules:

- `nosir.lexer`: `Lexer`, which reads tokens line by line from any iterable
  of lines (`next_token`, `peek`, `save_token`, `clear_save_buffer`), with
  `Token`, `Location`, `TokenType` and `is_only_whitespace`.
- `nosir.generator`: `X86Generator`, which writes instructions to a text
  stream (`print_default_header`, `print_asm`, `print_mov`,
  `print_add_sub_mul`) and maps variable names to stack slots through
  `var_table`, `calc_var_offset` and `resolve_ident`.
- `nosir.parser`: `Parser`, which reads statements and drives the generator.
- `nosir.cli`: `check_extension`, `compile_file(src, dest="default.asm")`
  and `main`.

## What it does not do

- It only writes assembly text; it does not assemble or link it.
- The output file name cannot be chosen from the command line; use
  `compile_file` from Python for another destination.
- Functions take no parameters and return no values.
- Division (`/`) is recognised but produces no instructions.
- A function call is written as `call name` with no line break after it.

## Running the tests

```
pip install .[test]
pytest
```