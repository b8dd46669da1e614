"""hazardous - detect unvalidated `rm -rf` style invocations in shell, Makefile and Go sources."""

__version__ = "0.3.0"
