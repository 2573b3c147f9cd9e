from .tokens import *
