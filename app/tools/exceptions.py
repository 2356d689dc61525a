class ToolError(Exception):
    """Raised when an external program cannot be run to completion."""
