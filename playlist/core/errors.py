class PlaylistError(Exception):
    """Base exception for playlist domain errors."""

    code = "PLAYLIST_ERROR"


class FingerprintConflict(PlaylistError):
    """Client fingerprint does not match the current server fingerprint."""

    code = "PLAYLIST_FINGERPRINT_MISMATCH"

    def __init__(self, server_fingerprint: str):
        super().__init__("Client fingerprint does not match server fingerprint")
        self.server_fingerprint = server_fingerprint


class PositionOutOfRange(PlaylistError):
    """Target position outside the valid range for the operation."""

    code = "INVALID_INDEX"


class ItemNotFound(PlaylistError):
    """Item does not exist, or belongs to another channel."""

    code = "NOT_FOUND"

    def __init__(self, item_id: str):
        super().__init__(f"Item not found: {item_id}")
        self.item_id = item_id


class InvalidInput(PlaylistError):
    """Structurally malformed request, rejected before any playlist logic runs."""

    code = "INVALID_INPUT"


class InvalidPagination(InvalidInput):
    code = "INVALID_PAGINATION"


class StoreFailure(PlaylistError):
    """Persistence failed mid-commit. Nothing was applied; safe to retry."""

    code = "STORE_FAILURE"
