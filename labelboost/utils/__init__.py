from .misc import *
from .comparable_mixin import ComparableMixin
