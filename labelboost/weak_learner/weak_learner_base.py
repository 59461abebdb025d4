import numpy as np


class WeakLearnerBase:
    """
    This class implements an abstract base weak learner that should be inherited. A weak learner holds the fixed training examples and candidate features, and generates at each boosting round a new weak predictor fitted to the current distributions.
    """
    def __init__(self, examples, encoder):
        self.examples = examples
        self.encoder = encoder

    @property
    def labels(self):
        return self.encoder.labels

    def new_stump(self, distributions):
        raise NotImplementedError


class WeakPredictorBase:
    """
    Abstract weak predictor. Subclasses define the 'predict' method for one (example, label) pair.
    """
    def predict(self, example, label):
        raise NotImplementedError

    def predict_labels(self, example, labels):
        """
        Returns the predictions for all 'labels' as an array of shape (len(labels),).
        """
        return np.array([self.predict(example, label) for label in labels])

