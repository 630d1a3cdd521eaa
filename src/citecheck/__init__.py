# ABOUTME: citecheck - verify bibliographic references against scholarly metadata sources.
# ABOUTME: Exposes the package version used in the HTTP User-Agent and CLI.

__version__ = "0.1.0"
