"""
Domain errors raised by the session, attempt and catalog services
"""


class SkillForgeError(Exception):
    """Base class for every error a core operation can raise"""

    code = "skillforge_error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__


class InvalidCredentials(SkillForgeError):
    code = "invalid_credentials"


class InvalidToken(SkillForgeError):
    code = "invalid_token"


class NotFound(SkillForgeError):
    code = "not_found"


class DuplicateEmail(SkillForgeError):
    code = "duplicate_email"


class ValidationError(SkillForgeError):
    code = "validation_error"


class GenerationFailed(SkillForgeError):
    code = "generation_failed"


class InvalidTransition(SkillForgeError):
    """Operation is not allowed in the attempt's current state"""
    code = "invalid_transition"


class OperationInProgress(SkillForgeError):
    """A submit or login is already in flight for this session"""
    code = "operation_in_progress"
