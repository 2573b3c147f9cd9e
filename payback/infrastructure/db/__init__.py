from .sqla_manager import *
