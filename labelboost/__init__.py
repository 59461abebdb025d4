from .exceptions import LabelBoostError, InvalidInput, InvariantViolation
from .example import Example, Feature, MultiLabelExample, PredicateFeature, AttributeFeature
from .label_encoder import LabelEncoder
from .distribution import Distribution, uniform_distribution, search_cumulative
from .weak_learner import DecisionStump, DecisionStumper
from .adaboost_mh import AdaBoostMH

__version__ = '0.1.0'
