"""Compiler for the Nos IR language: lexer, x86-64 NASM generator, parser and command line."""

__version__ = "0.1.0"
__all__ = ["lexer", "generator", "parser", "cli"]