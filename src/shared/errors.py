"""Base class for expected business errors returned inside ``Err``."""


class DomainError(Exception):
    """An expected, named failure of a use case.

    Subclasses are returned (not raised) by the use cases, so callers can
    branch on the concrete class. ``name`` is stable across releases and is
    what the HTTP layer reports back to clients.
    """

    default_message = "Domain error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def name(self) -> str:
        return type(self).__name__

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self.message == other.message

    def __hash__(self) -> int:
        return hash((type(self), self.message))

    def __repr__(self) -> str:
        return f"{self.name}({self.message!r})"
