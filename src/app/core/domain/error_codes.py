from enum import StrEnum


class ClientErrorCode(StrEnum):
    """Machine readable codes for rejected client and address writes."""
    EMAIL_ALREADY_EXISTS = "EMAIL_ALREADY_EXISTS"
    PHONE_ALREADY_EXISTS = "PHONE_ALREADY_EXISTS"
    ZIP_CODE_ALREADY_EXISTS = "ZIP_CODE_ALREADY_EXISTS"
