"""Exception hierarchy for the server manifest build.

Every failure here reflects an inconsistent build state produced upstream,
so none of them is retryable without re-running the compiler.
"""


class ManifestBuildError(Exception):
    """Base exception for all build errors."""

    def __init__(self, message: str = "", *, retryable: bool = False) -> None:
        super().__init__(message)
        self.retryable = retryable


class MissingManifestEntry(ManifestBuildError):
    """A module path has no entry in the artifact graph."""

    def __init__(self, path: str) -> None:
        super().__init__(f'Could not find file "{path}" in the compiler manifest')
        self.path = path


class UnresolvableSymlink(ManifestBuildError):
    """A module path could not be canonicalized on the filesystem."""

    def __init__(self, original: str, attempted: str, reason: str = "") -> None:
        message = f'Could not resolve "{original}" (tried "{attempted}")'
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.original = original
        self.attempted = attempted


class AssetReadFailure(ManifestBuildError):
    """A stylesheet or font asset could not be read from disk."""

    def __init__(self, path: str, reason: str = "") -> None:
        message = f'Could not read asset "{path}"'
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.path = path


class TemplateError(ManifestBuildError):
    """A template is missing a required placeholder or has an unknown one."""


class ConfigError(ManifestBuildError):
    """Invalid or missing configuration."""


class InputFormatError(ManifestBuildError):
    """A collaborator input file does not have the expected shape."""
