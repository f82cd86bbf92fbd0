"""srcglob: expand source-file glob patterns into concrete paths."""

from srcglob.glob import GlobResolver, ResolverConfig, resolve

__all__ = ["GlobResolver", "ResolverConfig", "resolve"]
