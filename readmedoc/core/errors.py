"""Exception hierarchy for README conversion."""


class ReadmeDocError(Exception):
    """Base exception for readmedoc failures."""


class ConfigurationError(ReadmeDocError, TypeError):
    """Raised synchronously when arguments or options have an invalid shape."""


class EquationError(ReadmeDocError, ValueError):
    """Base exception for malformed equation blocks."""

    def __init__(self, message, node):
        super().__init__(message)
        self.node = node


class MalformedMarkerError(EquationError):
    """Raised when an equation start comment lacks a usable attribute."""

    def __init__(self, attribute, node, reason="missing"):
        self.attribute = attribute
        self.reason = reason
        if reason == "unterminated":
            detail = f"Equation comment `{attribute}` value is missing a closing quote"
        elif reason == "empty":
            detail = f"Equation comment `{attribute}` must not be empty"
        else:
            detail = f"Equation comments must have a valid `{attribute}` attribute"
        super().__init__(f"invalid node. {detail}. Node: {node}", node)


class MalformedBlockError(EquationError):
    """Raised when an equation start comment has no matching end comment."""

    def __init__(self, node):
        super().__init__(
            "invalid node. Invalid equation comment. Ensure that the Markdown file "
            f"includes both starting and ending equation comments. Node: `{node}`",
            node,
        )
