"""Edit the Created / Modified / LastPrinted dates of OOXML (.docx) documents."""
from word_dates.logic.metadata_api import describe_error, load, save  # noqa: F401
from word_dates.models.document_dates import DocumentDates  # noqa: F401
