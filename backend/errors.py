"""
errors.py
---------
Fatal pipeline errors. Every error aborts the analysis at first occurrence;
the message is written for the end user and is shown verbatim.

All classes derive from ValueError so callers that only care about
"bad upload" can keep catching ValueError.
"""

_JSON_HINT = "Make sure you chose the JSON format from Instagram when exporting."


class AnalysisError(ValueError):
    """Base class. `filename` names the offending file when there is one."""

    default_message = "Something went wrong while reading your export."

    def __init__(self, message: str | None = None, filename: str | None = None):
        self.filename = filename
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def kind(self) -> str:
        return type(self).__name__


class FormatError(AnalysisError):
    default_message = (
        "No valid files found. Please make sure you're uploading the "
        "followers_and_following folder or the correct JSON files."
    )


class MissingFollowingError(AnalysisError):
    default_message = "We need your following.json file to compare."


class MissingFollowersError(AnalysisError):
    default_message = "We need at least one followers_*.json file to compare."


class ParseError(AnalysisError):
    def __init__(self, filename: str, message: str | None = None):
        super().__init__(
            message or f"{filename} appears empty or unreadable. {_JSON_HINT}",
            filename=filename,
        )


class SchemaError(AnalysisError):
    def __init__(self, filename: str, message: str | None = None):
        super().__init__(
            message or (
                f"{filename} does not look like a real Instagram export. "
                "Please upload files directly from Instagram's download tool."
            ),
            filename=filename,
        )


class SizeLimitError(AnalysisError):
    def __init__(self, filename: str, message: str | None = None):
        super().__init__(
            message or f"{filename} is larger than the allowed limit.",
            filename=filename,
        )
