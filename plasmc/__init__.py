"""Front end for the Plasm language: spans, line tables, tokens, syntax tree, diagnostics and parser."""

__version__ = "0.1.0"