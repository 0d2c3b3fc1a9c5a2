"""Command-line entry point for compiling ``.nir`` sources."""

from __future__ import annotations

import sys
import time
from pathlib import Path

from nosir.parser import Parser

DEFAULT_OUTPUT = "default.asm"
EXTENSION = ".nir"


def check_extension(path: str) -> bool:
    """True if the name contains the ``.nir`` extension marker."""
    return EXTENSION in str(path)


def compile_file(src: str | Path, dest: str | Path = DEFAULT_OUTPUT) -> None:
    """Compile the source file ``src`` into assembly written to ``dest``."""
    with open(src, encoding="utf-8") as source, open(dest, "w", encoding="utf-8") as out:
        Parser(source, out).parse()


def _clock(moment: time.struct_time) -> str:
    return f"{moment.tm_hour}:{moment.tm_min}:{moment.tm_sec}"


def main(argv: list[str] | None = None) -> int:
    """Run the compiler on the single file named in ``argv``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("No source file (.nir) provided.", end="")
        return 0
    if len(args) > 1:
        print("Too many arguments.", end="")
        return 0
    src = args[0]
    if not check_extension(src):
        print("Wrong file type. Correct extension: .nir", end="")
        return 0

    start = int(time.time())
    print(f"Started at {_clock(time.localtime(start))}")
    try:
        compile_file(src)
    except OSError as exc:
        print(f"Cannot compile {src}: {exc.strerror or exc}")
        return 1
    end = int(time.time())
    print(f"Finished at {_clock(time.localtime(end))} and took {end - start} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())