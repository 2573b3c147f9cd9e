from .auth import router as AuthRouter
from .user import router as UserRouter
