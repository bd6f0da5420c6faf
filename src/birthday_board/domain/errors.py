"""Error types raised by the birthday board."""

from birthday_board.domain.render import RenderedImage


class BirthdayBoardError(Exception):
    """Base class for all birthday board failures."""


class InvalidRequestError(BirthdayBoardError):
    """The request input (date or roster) cannot be used; nothing was rendered."""


class AssetMissingError(BirthdayBoardError):
    """A mandatory rendering asset is missing or unreadable."""


class ImageUploadError(BirthdayBoardError):
    """The image rendered but could not be handed to storage.

    The rendered image is kept on the error so callers can retry the upload
    without rendering again.
    """

    def __init__(self, blob_name: str, image: RenderedImage, reason: str) -> None:
        super().__init__(f"Failed to upload {blob_name}: {reason}")
        self.blob_name = blob_name
        self.image = image
        self.reason = reason
