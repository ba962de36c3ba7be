"""Exception types raised inside the conversion pipeline."""


class LlmReadyError(Exception):
    """Base class for llmready errors."""


class SelectorCompileError(LlmReadyError):
    """A CSS selector could not be parsed."""

    def __init__(self, selector: str, reason: str = ""):
        self.selector = selector
        self.reason = reason
        message = f"Invalid selector {selector!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ExtractionFault(LlmReadyError):
    """Evaluating a single selector against the document failed."""


class ConversionFault(LlmReadyError):
    """The HTML to Markdown conversion step failed."""


class EmptyInputFault(LlmReadyError):
    """The source response had no usable body."""


class InputTooLargeFault(LlmReadyError):
    """The source response exceeds the configured size limit."""
