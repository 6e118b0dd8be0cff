from word_dates.exceptions.errors import (  # noqa: F401
    ArchiveError,
    CommitError,
    CorruptArchiveError,
    EntryNotFoundError,
    ExtractError,
    MissingFieldError,
    MissingPartError,
    ValidationError,
    WordDatesError,
    XmlParseError,
)
