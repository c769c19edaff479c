"""Core constants, exceptions and interfaces."""
from pixelwalker.core.constants import *
from pixelwalker.core.exceptions import *
from pixelwalker.core.interfaces import *
