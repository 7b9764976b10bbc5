"""Core rendering machinery: contexts, bindings, helpers, editor and parsers."""
