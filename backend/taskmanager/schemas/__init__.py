"""
Schema module initialization.
Exports all schema classes from submodules for convenient imports.
"""
from .common import *
from .user import *
from .task import *
