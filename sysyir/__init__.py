"""An SSA intermediate representation for SysY programs, printed as LLVM-style IR."""

__version__ = "0.1.0"