"""Exception hierarchy for SAXQuant.

All errors raised by the package derive from ``SaxError``, which is itself a
``ValueError`` so existing ``except ValueError`` handlers keep working.
"""


class SaxError(ValueError):
    """Base exception for all SAXQuant errors."""
    pass


class ConfigurationError(SaxError):
    """Raised when a quantizer is constructed with invalid sizes."""
    pass


class EmptyInputError(SaxError):
    """Raised when a baseline is trained on zero samples."""
    pass
