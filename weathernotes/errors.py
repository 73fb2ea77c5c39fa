"""Document-scoped errors raised while processing a single note."""


class NoteError(Exception):
    """Base class for failures that abort one note but not the run."""

    stage = "note"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MetadataError(NoteError):
    """Frontmatter missing, malformed, incomplete or inconsistent."""

    stage = "metadata"


class MissingFrontmatterError(MetadataError):
    """The document has no frontmatter region at all."""


class GeocodeError(NoteError):
    stage = "geocode"


class FetchError(NoteError):
    stage = "fetch"


class RenderError(NoteError):
    stage = "render"


class EmptyDatasetError(RenderError):
    """Summary requested for zero days of data."""


class UpsertError(NoteError):
    """Managed block markers are unpaired or out of order."""

    stage = "upsert"
