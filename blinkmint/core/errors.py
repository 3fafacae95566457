"""Failure taxonomy of the mint action pipeline.

Every pipeline failure is an ``ActionError``. ``public_message`` is what the
caller sees in the 400 body; ``detail`` is only written to the log.
"""
from typing import Optional

GENERIC_MESSAGE = "An unknown error occurred"


class ActionError(Exception):
    public_message: str = GENERIC_MESSAGE

    def __init__(self, detail: str = "", *, public_message: Optional[str] = None):
        super().__init__(detail or self.public_message)
        self.detail = detail
        if public_message is not None:
            self.public_message = public_message


# Input validation
class InputValidationError(ActionError):
    public_message = "Invalid request"


class InvalidAccount(InputValidationError):
    public_message = 'Invalid "account" provided'


class InvalidQueryParameter(InputValidationError):
    def __init__(self, name: str, detail: str = ""):
        super().__init__(detail, public_message=f"Invalid input query parameter: {name}")
        self.name = name


# Upstream collaborators
class UpstreamServiceError(ActionError):
    public_message = GENERIC_MESSAGE


class GenerationFailure(UpstreamServiceError):
    pass


class PinningFailure(UpstreamServiceError):
    pass


class MintRequestFailure(UpstreamServiceError):
    pass


# Transaction assembly
class AssemblyFailure(ActionError):
    public_message = "Failed to prepare transaction"


class MintDecodeFailure(AssemblyFailure):
    pass


class ExpiryAnchorFailure(AssemblyFailure, UpstreamServiceError):
    """The RPC node could not provide a recent blockhash."""
