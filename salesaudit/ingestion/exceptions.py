class IngestionError(Exception):
    """Base exception for ingestion failures.

    Messages are one-line and safe to show to the end user verbatim.
    """


class UnsupportedFormatError(IngestionError):
    """Raised when an upload matches no supported file family."""


class CorruptArchiveError(IngestionError):
    """Raised when an uploaded archive cannot be opened or parsed."""


class NoTranscriptFoundError(IngestionError):
    """Raised when an archive holds no usable conversation text file."""


class InsufficientTextError(IngestionError):
    """Raised when OCR recognizes too little text to be worth analyzing."""


class RecognitionError(IngestionError):
    """Raised when the OCR engine fails on an image."""


class IngestionCancelledError(IngestionError):
    """Raised when the caller cancels an ingestion call in flight."""


class TranscriptionFailedError(Exception):
    """Raised when a single media item cannot be transcribed.

    Never leaves the transcript assembler: it is recorded in-band as a
    failure block instead.
    """
