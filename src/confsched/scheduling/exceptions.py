#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
class ParseError(Exception):
    pass


class InvalidReferenceError(Exception):
    """An entity passed to the engine is not registered with the manager
    that should own it."""


class PreconditionViolatedError(Exception):
    """The caller broke the contract of an operation (eg created an event
    whose interval was never validated)."""


class UsernameTakenError(Exception):
    pass


class InvalidCredentialsError(Exception):
    pass
