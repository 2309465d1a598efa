"""Gamelist synchronization errors."""


class GamelistError(Exception):
    """Base class for gamelist synchronization errors."""
    pass


class PathResolutionError(GamelistError):
    """A path could not be canonicalized (usually because it does not exist)."""
    pass


class ContainmentViolation(GamelistError):
    """A path lies outside the system's root folder."""
    pass


class FolderCreationRefused(GamelistError):
    """Resolving a path would require creating a folder speculatively."""
    pass


class DocumentParseError(GamelistError):
    """The gamelist document is malformed or has no <gameList> root."""
    pass


class DocumentSaveError(GamelistError):
    """The gamelist document could not be written."""
    pass


class MissingRootNode(GamelistError):
    """The system has no root folder to synchronize from."""
    pass
