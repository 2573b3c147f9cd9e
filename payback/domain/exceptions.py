from payback.common.exceptions import AppBaseException

class DomainLayerException(AppBaseException):
    '''Base for domain layer'''



### Model related
class ModelIntegrityError:
    '''Base for integrity violation exceptons. Use as adapter for repositories' integrity exceptions'''
    def __init__(self, *args, orig: Exception|None = None):
        super().__init__(*args)
        self.orig = orig

####### Users

class BaseUserException(DomainLayerException):
    '''Base for user Exceptions'''

class UserValueError(BaseUserException):
    '''Malformed or missing input. Use within User Domain model methods and services as ValueError'''

class PasswordPolicyError(UserValueError):
    '''Raised when a password does not satisfy the password policy. Message describes the whole rule set, never the failed rule'''

class UserIntegrityError(ModelIntegrityError, BaseUserException):
    '''Raised when user model integrity gets violated'''

class UserAlreadyExists(UserIntegrityError):
    '''Raised when user with such ID/Username/Email already exists'''
