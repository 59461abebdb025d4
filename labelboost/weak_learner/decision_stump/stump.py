from types import MappingProxyType

import numpy as np

from ...utils import ComparableMixin
from ..weak_learner_base import WeakPredictorBase


class StumpCandidate(ComparableMixin, cmp_attr='z'):
    """
    StumpCandidate is a simple class that stores the best feature found on a range of features by the DecisionStumper search, along with the label-weighted sums of this feature. Candidates are compared by their score 'z', so that the best of several ranges is simply min(candidates). Since 'min' keeps the first of equal elements, ranges must be given in feature order to break ties in favor of the first feature.
    """
    def __init__(self, feature_idx, z, scores, w_plus, w_minus):
        """
        Args:
            feature_idx (int): Index of the feature in the stumper's features.
            z (float): Score sum_l sqrt(W+[f,l] * W-[f,l]) of the feature.
            scores (Array of shape (n_features_in_range,)): Scores of all features of the range, in feature order. They are concatenated by the stumper to compute zt in a single sum, so that zt does not depend on how the features were split.
            w_plus (Array of shape (n_labels,)): Weight of the examples activating the feature and having the label.
            w_minus (Array of shape (n_labels,)): Weight of the examples activating the feature and not having the label.
        """
        self.feature_idx = feature_idx
        self.z = z
        self.scores = scores
        self.w_plus = w_plus
        self.w_minus = w_minus

    def compute_confidence_rates(self):
        """
        Confidence of each label, smoothed by adding 1 to both sums to avoid divisions by zero and logarithms of zero.
        """
        return .5 * np.log((1 + self.w_plus)/(1 + self.w_minus))


class DecisionStump(WeakPredictorBase):
    """
    Immutable weak predictor splitting on a single binary feature. When the feature is active on an example, the stump predicts the confidence rate of the label; otherwise it predicts 'abstain_value' whatever the label.
    """
    __slots__ = ('_feature', '_feature_idx', '_confidence_rates', '_zt', '_abstain_value')

    def __init__(self, feature, confidence_rates, zt, feature_idx=None, abstain_value=-1.0):
        """
        Args:
            feature (Feature object): Feature tested by the stump.
            confidence_rates (Mapping of {label:confidence}): Confidence of the presence of each label when the feature is active.
            zt (float): Normalization constant computed by the stumper at the round the stump was found.
            feature_idx (int, optional): Index of the feature in the stumper's features, kept for diagnostics.
            abstain_value (float, optional): Prediction when the feature is not active. The default -1.0 predicts absence of every label.
        """
        object.__setattr__(self, '_feature', feature)
        object.__setattr__(self, '_feature_idx', feature_idx)
        object.__setattr__(self, '_confidence_rates', MappingProxyType(dict(confidence_rates)))
        object.__setattr__(self, '_zt', float(zt))
        object.__setattr__(self, '_abstain_value', float(abstain_value))

    def __setattr__(self, name, value):
        raise AttributeError(f"'{type(self).__name__}' object is immutable.")

    def __delattr__(self, name):
        raise AttributeError(f"'{type(self).__name__}' object is immutable.")

    def __reduce__(self):
        return (type(self), (self._feature, dict(self._confidence_rates), self._zt, self._feature_idx, self._abstain_value))

    @property
    def feature(self):
        return self._feature

    @property
    def feature_idx(self):
        return self._feature_idx

    @property
    def confidence_rates(self):
        return self._confidence_rates

    @property
    def zt(self):
        return self._zt

    @property
    def abstain_value(self):
        return self._abstain_value

    def predict(self, example, label):
        if not self._feature.test(example):
            return self._abstain_value
        return self._confidence_rates.get(label, 0.0)

    def __repr__(self):
        confidences = ', '.join(f'{label!r}: {c:.4f}' for label, c in self._confidence_rates.items())
        return f'DecisionStump(feature={str(self._feature)!r}, confidence_rates={{{confidences}}}, zt={self._zt:.4f})'
