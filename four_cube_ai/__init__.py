from .alg import AlphaBetaAI, AlphaBetaSearch, choose_move
from .backend.models import BoardSnapshot, Position
from .config import EngineSettings
from .framework import Alg3D

__version__ = "0.1.0"
