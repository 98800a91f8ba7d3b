"""
mdinclude - an mdBook preprocessor for ``{{#mdinclude}}`` directives

Works like mdBook's built-in ``{{#include}}`` but rewrites relative
Markdown links inside the included content so they keep pointing at the
right files from the including chapter's location.
"""

__version__ = "0.3.0"
__all__ = ["__version__"]
