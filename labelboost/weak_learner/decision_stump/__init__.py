from .stump import DecisionStump, StumpCandidate
from .decision_stump import DecisionStumper, StumpFinder
