"""Exceptions raised by monopack for conditions that abort a build."""


class MonopackError(Exception):
    """Base class for fatal monopack errors."""


class ManifestReadError(MonopackError):
    """Raised when a package.json cannot be read or is malformed."""


class ConfigError(MonopackError):
    """Raised when a monopack config file is invalid."""


class MonorepoRootNotFoundError(MonopackError):
    """Raised when no monorepo root can be determined for an entry file."""


class ObservationsFileError(MonopackError):
    """Raised when the bundler's observations file is malformed."""
