from .passwords import *
from .tokens import *
