"""Drive error types."""


class DriveError(Exception):
    """Base exception for provider operations."""


class DriveNotConfiguredError(DriveError):
    """No usable credentials, so no provider call can be made."""

    def __init__(self):
        super().__init__(
            "Google Drive is not configured. "
            "Set GOOGLE_CLIENT_ID, GOOGLE_CLIENT_SECRET and GOOGLE_REFRESH_TOKEN."
        )


class DriveFileNotFoundError(DriveError):
    """File does not exist or the operator's token may not access it."""

    def __init__(self, file_id: str):
        super().__init__(f"File not found or access denied: {file_id}")
        self.file_id = file_id
