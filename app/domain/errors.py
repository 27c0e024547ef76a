"""Domain errors raised by the import, reconcile and export services."""


class ParseError(ValueError):
    """The input file is not valid JSON or does not match the Tim export shape."""


class InvalidSelectionError(ValueError):
    """A task or record selected by the user does not exist in the current graph."""
