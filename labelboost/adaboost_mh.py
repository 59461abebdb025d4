import logging
import threading

import numpy as np
from sklearn.metrics import hamming_loss

from .distribution import Distribution
from .exceptions import InvalidInput, InvariantViolation
from .weak_learner import DecisionStumper


class AdaBoostMH:
    """
    Multi-label AdaBoost.MH with decision stumps. Each (example, label) pair is treated as a binary classification problem with its own weight, kept in one Distribution per label.

    The number of rounds is decided by the caller, who calls 'round' as many times as needed:

        model = AdaBoostMH(examples, DecisionStumper(features, examples))
        for _ in range(n_rounds):
            model.round()
    """
    normalizations = ('sum', 'zt')

    def __init__(self, examples, stumper, normalization='sum'):
        """
        Args:
            examples (Sequence of Example objects): Training examples. They must be the very objects given to the stumper, in the same order.
            stumper (DecisionStumper object): Weak learner that generates a stump at each round.
            normalization (str, either 'sum' or 'zt', optional, default='sum'): How the distributions are normalized after each update. With 'sum', the weights are divided by their sum so that each distribution sums to 1. With 'zt', they are divided by the 'zt' constant of the new stump, which sums the scores of all features and thus does not keep the weights summing to 1.
        """
        examples = list(examples)
        if not examples:
            raise InvalidInput('AdaBoostMH needs at least one training example.')
        if len(examples) != stumper.n_examples:
            raise InvalidInput(f'Got {len(examples)} examples but the stumper was built on {stumper.n_examples} examples.')
        if not all(example is stumper_example for example, stumper_example in zip(examples, stumper.examples)):
            raise InvalidInput('The examples must be the ones the stumper was built on, in the same order.')
        if normalization not in self.normalizations:
            raise InvalidInput(f"Unknown normalization '{normalization}'. Choose among {self.normalizations}.")

        self.examples = examples
        self.stumper = stumper
        self.normalization = normalization

        self.distributions = {label:Distribution.uniform(len(examples)) for label in self.labels}
        self.weak_predictors = []

        self._round_lock = threading.Lock()

    @classmethod
    def from_features(cls, features, examples, normalization='sum', **stumper_kwargs):
        """
        Builds the DecisionStumper on 'features' and 'examples' and returns the AdaBoostMH object using it. 'stumper_kwargs' are passed to the DecisionStumper.
        """
        examples = list(examples)
        stumper = DecisionStumper(features, examples, **stumper_kwargs)
        return cls(examples, stumper, normalization=normalization)

    @property
    def encoder(self):
        return self.stumper.encoder

    @property
    def labels(self):
        return self.stumper.labels

    @property
    def H(self):
        """
        The ensemble, as a tuple of the stumps in the order they were found.
        """
        return tuple(self.weak_predictors)

    @property
    def n_rounds(self):
        return len(self.weak_predictors)

    def round(self):
        """
        Implements one round of boosting: finds a new stump for the current distributions, reweights the examples of every label with
            D_l[i] <- D_l[i] * exp(y_il * h(x_i, l)) / normalizer
        where y_il is +1 if example i has label l and -1 otherwise, and appends the stump to the ensemble.

        Rounds are serialized if the object is shared between threads.

        Returns the new stump.
        """
        with self._round_lock:
            stump = self.stumper.new_stump(self.distributions)
            if self.normalization == 'zt' and stump.zt == 0:
                raise InvariantViolation(f"Stump on feature '{stump.feature}' has zt = 0; the distributions cannot be normalized by it.")

            weak_prediction = self._weak_prediction_on_training(stump) # Shape (n_examples, n_labels)
            margins = self.stumper.encoded_Y * weak_prediction

            for j, label in enumerate(self.labels):
                self._update_distribution(self.distributions[label], margins[:,j], stump.zt)

            self.weak_predictors.append(stump)

        logging.info(f"Boosting round {self.n_rounds:03d} | Feature: {stump.feature} | zt: {stump.zt:.4f}")
        return stump

    def _weak_prediction_on_training(self, stump):
        """
        Predictions of the stump on the training examples for every label. Uses the activations already computed by the stumper instead of testing the feature again.
        """
        active = self.stumper.activations[:,stump.feature_idx]
        confidence_rates = np.array([stump.confidence_rates[label] for label in self.labels])
        return np.where(active.reshape(-1,1), confidence_rates, stump.abstain_value)

    def _update_distribution(self, distribution, margins, zt):
        distribution.p *= np.exp(margins)
        if self.normalization == 'zt':
            distribution.p /= zt
            logging.debug(f'Distribution sums to {distribution.total():.6f} after zt normalization.')
        else:
            total = distribution.total()
            if not np.isfinite(total) or total <= 0:
                raise InvariantViolation(f'Distribution weights sum to {total} and cannot be normalized.')
            distribution.p /= total

    def predict(self, example, label):
        """
        Returns the margin of the ensemble for the pair (example, label). A positive margin predicts the presence of the label; its magnitude is the confidence.
        """
        return sum((weak_predictor.predict(example, label) for weak_predictor in self.weak_predictors), 0.0)

    def predict_scores(self, examples):
        """
        Returns the margins of every example for every known label as an array of shape (n_examples, n_labels), with labels in the encoder's order.
        """
        examples = list(examples)
        scores = np.zeros((len(examples), len(self.labels)))
        for weak_predictor in self.weak_predictors:
            scores += np.array([weak_predictor.predict_labels(example, self.labels) for example in examples]).reshape(scores.shape)
        return scores

    def predict_labels(self, examples):
        """
        Returns for each example the list of labels predicted as present.
        """
        return self.encoder.decode_labels(self.predict_scores(examples))

    def evaluate(self, examples):
        """
        Hamming distance between the predictions and the true labels: the number of (example, label) pairs, over all known labels, where the sign of the margin disagrees with the membership of the label. Lower is better. It is not normalized.
        """
        Y_pred, Y_true = self._binary_predictions(examples)
        return int(np.sum(Y_pred != Y_true))

    def hamming_loss(self, examples):
        """
        Hamming distance normalized by the number of (example, label) pairs.
        """
        examples = list(examples)
        if not examples:
            raise InvalidInput('Cannot compute the Hamming loss of an empty set of examples.')
        Y_pred, Y_true = self._binary_predictions(examples)
        return hamming_loss(Y_true, Y_pred)

    def _binary_predictions(self, examples):
        examples = list(examples)
        Y_pred = (self.predict_scores(examples) > 0).astype(int)
        Y_true = (self.encoder.encode_labels(examples) > 0).astype(int)
        return Y_pred, Y_true

    def __getstate__(self):
        self_dict = self.__dict__.copy()
        del self_dict['_round_lock']
        return self_dict

    def __setstate__(self, state):
        self.__dict__.update(state)
        self._round_lock = threading.Lock()
