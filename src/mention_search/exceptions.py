"""Exception hierarchy for mention-search."""


class MentionSearchError(Exception):
    """Base exception for all mention-search errors."""

    exit_code: int = 1
    user_message: str = "An error occurred"

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message or self.user_message)
        if user_message:
            self.user_message = user_message


# Config Errors
class ConfigError(MentionSearchError):
    """Configuration errors."""

    exit_code = 20
    user_message = "Configuration error"


class ConfigNotFoundError(ConfigError):
    """Configuration file not found."""

    exit_code = 21
    user_message = "Configuration file not found"


class ConfigValidationError(ConfigError):
    """Configuration validation failed."""

    exit_code = 22
    user_message = "Invalid configuration"


# Search Errors
class SearchError(MentionSearchError):
    """Search-related errors."""

    exit_code = 30
    user_message = "Search error"


class ProjectRootError(SearchError):
    """Project root is missing, not a directory, or unreadable."""

    exit_code = 31
    user_message = "Project root does not exist or is not a directory"


class IndexingError(SearchError):
    """Error while building the file cache."""

    exit_code = 32
    user_message = "Error scanning project files"


class IgnoreFileError(IndexingError):
    """The project ignore file exists but cannot be read."""

    exit_code = 33
    user_message = "Cannot read the project .gitignore file"


# Command Errors
class CommandError(MentionSearchError):
    """Command execution errors."""

    exit_code = 40
    user_message = "Command error"


class InvalidArgumentError(CommandError):
    """Invalid argument provided."""

    exit_code = 42
    user_message = "Invalid argument"
