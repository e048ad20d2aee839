"""Domain exceptions."""


class KcalBotError(Exception):
    """Base exception for meal bot failures."""


class ImageFetchError(KcalBotError):
    """The image could not be downloaded for analysis."""


class PersistenceError(KcalBotError):
    """The datastore rejected or dropped a write."""
