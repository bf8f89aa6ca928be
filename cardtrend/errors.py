# cardtrend/errors.py

"""Exception hierarchy for the re-pricing pipeline."""


class CardtrendError(Exception):
    """Base class for all cardtrend errors."""


class CatalogueError(CardtrendError):
    """The catalogue file could not be read, decoded or written."""


class PageFetchError(CardtrendError):
    """A product page could not be rendered within the timeout."""


class PageParseError(CardtrendError):
    """Rendered HTML could not be parsed into a document."""
