"""Errors raised by the analysis pipeline."""


class ImageAnalysisError(RuntimeError):
    """
    Raised when an image cannot be analyzed at all.

    The message always starts with "Failed to analyze image: " followed
    by the underlying cause, which is kept as __cause__.
    """

    PREFIX = "Failed to analyze image: "

    def __init__(self, cause: str):
        self.causeMessage = cause
        super().__init__(f"{self.PREFIX}{cause}")
