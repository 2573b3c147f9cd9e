from payback.common.exceptions import AppBaseException

class CustomStorageException(AppBaseException):
    """Base for exceptions raised manually in storage services (databases, caches)"""

class StorageError(CustomStorageException):
    """Opaque storage failure. Raised by repositories instead of driver/ORM exceptions"""

### Startup
class StorageBootError(StorageError):
    '''Storage service failed to boot within given time'''

class StorageNotInitialized(StorageError):
    '''Storage service has been booted successfully, yet seems not to be initialized entirely'''
