from .connections import *
from .tracer import *
