"""Domain exceptions raised by the export pipeline."""


class ExportRejected(Exception):
    """An export request failed intake checks; no job was created."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def to_detail(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


class PolicyViolation(Exception):
    """A job broke a render policy after intake (e.g. too long)."""


class ExportInProgress(Exception):
    """An export session already has a job in flight."""
