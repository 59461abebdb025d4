from .weak_learner_base import WeakLearnerBase, WeakPredictorBase
from .decision_stump import DecisionStump, DecisionStumper
