class AppBaseException(Exception):
    """Global base exception. Every error raised on purpose by the service derives from it"""
