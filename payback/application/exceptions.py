from payback.common.exceptions import AppBaseException

class ApplicationLayerException(AppBaseException):
    '''Base for application layer'''

### Auth related
class AuthBaseException(ApplicationLayerException):
    '''Base for all exceptions related to authentication'''

class CredentialsException(AuthBaseException):
    '''Lookup or password verification failed. Never tells which of the two'''

class TokenIssueError(AuthBaseException):
    '''Token could not be signed (missing key, algorithm failure)'''
