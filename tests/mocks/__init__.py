from .hasher import *
from .tokens import *
from .traces import *
