class ParsingError(Exception):
    """Raised when statement text cannot be turned into transactions."""
