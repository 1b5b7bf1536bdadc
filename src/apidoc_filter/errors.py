"""Exceptions raised by the descriptor filter."""


class FilterError(Exception):
    """Base class for all apidoc-filter errors."""


class InvalidReference(FilterError):
    """A schema refers to a definition that is not in the document."""

    def __init__(self, name: str):
        super().__init__(f"Definition '{name}' is referenced but not defined")
        self.name = name


class DocumentFormatError(FilterError):
    """The input is not a Swagger 2.0 descriptor document."""


class ConfigError(FilterError):
    """The settings file could not be read or validated."""
