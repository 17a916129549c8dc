"""
Constants for the language and configuration binding passes.
"""
from typing import Final, Tuple


class BindingMessages:
    """Log and notice templates used by the binders."""
    WRONG_LANGUAGE_KEY: Final[str] = "Wrong language key '{key}' configured for control '{name}'"
    MISSING_LANGUAGE_KEY: Final[str] = "Control without language key: {name}"
    WRONG_PROPERTY: Final[str] = "Wrong property '{property}' configured for field '{field}'"
    UNKNOWN_SECTION: Final[str] = "Unknown section '{section}' configured for field '{field}'"
    DESIGNER_EXCEPTION_TITLE: Final[str] = "Designer exception!"
    DESIGNER_NOTICE_TITLE: Final[str] = "Designer"

    def __init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        for attr_name in dir(self):
            if not attr_name.startswith('_') and attr_name.isupper():
                value = getattr(self, attr_name)
                if not isinstance(value, str) or not value:
                    raise ValueError(f"BindingMessages.{attr_name} must be a non-empty string.")


class BindingConstants:
    """Property names and lookup rules shared by the binders."""
    LANGUAGE_KEY_PROPERTY: Final[str] = "language_key"
    ENUM_KEY_FORMAT: Final[str] = "{enum_name}.{member_name}"

    # Each pair is tried in order; the first existing directory of a pair is registered.
    DESIGN_LANGUAGE_DIRS: Final[Tuple[Tuple[Tuple[str, ...], Tuple[str, ...]], ...]] = (
        (("..", "..", "FormBind", "locales"), ("..", "..", "..", "FormBind", "locales")),
        (("..", "..", "locales"), ("..", "..", "..", "locales")),
    )

    def __init__(self) -> None:
        self.messages = BindingMessages()
        self.validate()

    def validate(self) -> None:
        if not self.LANGUAGE_KEY_PROPERTY:
            raise ValueError("LANGUAGE_KEY_PROPERTY must not be empty")
        if "{enum_name}" not in self.ENUM_KEY_FORMAT or "{member_name}" not in self.ENUM_KEY_FORMAT:
            raise ValueError("ENUM_KEY_FORMAT must reference both enum_name and member_name")
        for pair in self.DESIGN_LANGUAGE_DIRS:
            if len(pair) != 2 or not all(pair):
                raise ValueError("DESIGN_LANGUAGE_DIRS entries must be pairs of non-empty paths")

# Singleton instance for easy access
binding = BindingConstants()
