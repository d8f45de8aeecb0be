# Schemas package (re-export feature modules for stable imports)
from .fixtures import *
from .schedule import *
