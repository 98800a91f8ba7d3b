"""Core (non-CLI) building blocks of the mdinclude preprocessor."""
