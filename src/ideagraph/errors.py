"""Exception hierarchy for ideagraph."""


class IdeaGraphError(Exception):
    """Base class for all ideagraph errors."""


class RecordError(IdeaGraphError, ValueError):
    """An externally supplied idea record is missing required fields."""


class ViewStateError(IdeaGraphError, RuntimeError):
    """A view was used outside its mounted lifetime."""
