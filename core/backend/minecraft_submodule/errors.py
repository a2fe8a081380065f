"""
Error Types

Configuration-time failures. All of them abort the build; none are retried.
"""


class SubmoduleError(Exception):
    """Base class for every error raised while configuring a build"""


class ConfigurationError(SubmoduleError):
    """Invalid or out-of-order declaration"""


class UnresolvedModuleError(SubmoduleError):
    """A named module is absent from the registry"""

    def __init__(self, path: str):
        super().__init__(f"Module '{path}' does not exist in this build")
        self.path = path


class UnsupportedOperationError(SubmoduleError):
    """Operation invoked from a module whose role forbids it"""


class VersionIndexError(SubmoduleError):
    """A remote version index could not be read or had no match"""
