import logging

import numpy as np
import joblib as jl

from ..weak_learner_base import WeakLearnerBase
from .stump import DecisionStump, StumpCandidate
from ...exceptions import InvalidInput
from ...label_encoder import LabelEncoder
from ...utils import split_int


class DecisionStumper(WeakLearnerBase):
    """
    Weak learner generating decision stumps for AdaBoost.MH (Schapire and Freund, Boosting, p. 314).

    At each round, it finds the binary feature minimizing
        Z_f = sum over labels l of sqrt(W+[f,l] * W-[f,l])
    where W+[f,l] (resp. W-[f,l]) is the weight, under the distribution of label l, of the examples that activate f and have (resp. do not have) the label l. Examples on which f is not active contribute to neither sum.

    Ties are broken in favor of the feature that comes first in 'features'.
    Parallelization over the features is implemented with joblib.
    """
    def __init__(self, features, examples, n_jobs=1, abstain_value=-1.0):
        """
        Args:
            features (Iterable of Feature objects): Candidate features. Their order decides ties.
            examples (Iterable of Example objects): Training examples. Their order is the order of the weights of the distributions.
            n_jobs (int, optional, default=1): Number of jobs to scan the features in parallel. Follows joblib's convention (-1 means all CPUs).
            abstain_value (float, optional, default=-1.0): Prediction of the generated stumps when their feature is not active.
        """
        features = list(features)
        examples = list(examples)
        if not features:
            raise InvalidInput('DecisionStumper needs at least one feature.')
        if not examples:
            raise InvalidInput('DecisionStumper needs at least one example.')

        super().__init__(examples, LabelEncoder.from_examples(examples))
        self.features = features
        self.n_jobs = n_jobs
        self.abstain_value = abstain_value

        # Features and examples are fixed, so they are tested only once.
        self.activations = self.compute_activations(examples)
        self.encoded_Y = self.encoder.encode_labels(examples)

    @property
    def n_examples(self):
        return len(self.examples)

    @property
    def n_features(self):
        return len(self.features)

    def compute_activations(self, examples):
        """
        Returns a boolean array of shape (n_examples, n_features) where entry (i, f) is True if feature f is active on example i.
        """
        activations = np.zeros((len(examples), self.n_features), dtype=bool)
        for i, example in enumerate(examples):
            for j, feature in enumerate(self.features):
                activations[i,j] = feature.test(example)
        return activations

    def distributions_to_array(self, distributions):
        """
        distributions (Mapping of {label:Distribution}): Current distributions of the labels.

        Returns an array of shape (n_examples, n_labels) with the columns ordered as the labels of the encoder.
        """
        missing_labels = [label for label in self.labels if label not in distributions]
        if missing_labels:
            raise InvalidInput(f'No distribution given for labels {missing_labels}.')

        W = np.column_stack([distributions[label].p for label in self.labels])
        if W.shape[0] != self.n_examples:
            raise InvalidInput(f'Distributions have {W.shape[0]} weights but there are {self.n_examples} examples.')
        return W

    def new_stump(self, distributions):
        """
        Finds the best stump for the current distributions.

        Args:
            distributions (Mapping of {label:Distribution}): Current distributions of the labels.

        Returns a DecisionStump.
        """
        W = self.distributions_to_array(distributions)
        candidate, z_total = self.find_stump(W)

        # zt sums the scores of every scanned feature, not only the one selected.
        zt = 2 * z_total
        confidence_rates = dict(zip(self.labels, candidate.compute_confidence_rates().tolist()))
        feature = self.features[candidate.feature_idx]

        logging.debug(f"Selected feature '{feature}' (index {candidate.feature_idx}) with Z = {candidate.z:.6f}, zt = {zt:.6f}.")

        return DecisionStump(feature, confidence_rates, zt,
                             feature_idx=candidate.feature_idx,
                             abstain_value=self.abstain_value)

    def find_stump(self, W):
        """
        Scans the features, in parallel if 'n_jobs' is not 1, and merges the results of the ranges in feature order.

        Returns the best StumpCandidate and the sum of the scores of all features. The scores of the ranges are concatenated before being summed, so the sum is the same whatever the number of jobs.
        """
        stump_finder = StumpFinder(self.activations, self.encoded_Y, W)
        n_jobs = min(jl.effective_n_jobs(self.n_jobs), self.n_features)

        if n_jobs == 1:
            candidates = [stump_finder.find_stump()]
        else:
            parallelizer = jl.Parallel(n_jobs=n_jobs)
            candidates = parallelizer(jl.delayed(stump_finder.find_stump)(sub_idx) for sub_idx in split_int(self.n_features, n_jobs))

        best_candidate = min(candidates)
        z_total = float(np.sum(np.concatenate([candidate.scores for candidate in candidates])))
        return best_candidate, z_total


class StumpFinder:
    """
    Implements the algorithm to find the stump. It is separated from the class DecisionStumper so that only the arrays are sent to the workers when parallelized, and not the features and examples.
    """
    def __init__(self, activations, encoded_Y, W):
        """
        Args:
            activations (Array of shape (n_examples, n_features)): Boolean activations of the features.
            encoded_Y (Array of shape (n_examples, n_labels)): Labels encoded as +1 or -1.
            W (Array of shape (n_examples, n_labels)): Weights of the examples for each label.
        """
        self.activations = activations
        self.positive_weights = np.where(encoded_Y > 0, W, 0.)
        self.negative_weights = np.where(encoded_Y < 0, W, 0.)

    def find_stump(self, sub_idx=(None,)):
        """
        Algorithm to find the best stump within the features specified by the bounds 'sub_idx'.
        """
        A = self.activations[:,slice(*sub_idx)].astype(float)

        n_examples, n_features = A.shape
        n_labels = self.positive_weights.shape[1]

        # Sums are accumulated example by example, so the value for a feature does not depend on the range it is scanned in.
        w_plus = np.zeros((n_features, n_labels))
        w_minus = np.zeros((n_features, n_labels))
        for i in range(n_examples):
            self.update_moments(w_plus, w_minus, A[i], i)

        z = np.sum(np.sqrt(w_plus * w_minus), axis=1) # Shape (n_features,)

        best = int(np.argmin(z)) # argmin returns the first minimum
        offset = sub_idx[0] if sub_idx[0] is not None else 0

        return StumpCandidate(feature_idx=best + offset,
                              z=float(z[best]),
                              scores=z,
                              w_plus=w_plus[best].copy(),
                              w_minus=w_minus[best].copy())

    def update_moments(self, w_plus, w_minus, activation_row, example_idx):
        w_plus += activation_row.reshape(-1,1) * self.positive_weights[example_idx]
        w_minus += activation_row.reshape(-1,1) * self.negative_weights[example_idx]
