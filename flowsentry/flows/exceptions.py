class FlowLoadError(Exception):
    """Raised when a flows export cannot be read or parsed."""
