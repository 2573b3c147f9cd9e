from .passwords import *
from .password_policy import *
