"""The status introspection builtin."""

__version__ = '0.0.0.dev0'
