import numpy as np
from sklearn.utils import check_random_state

from .exceptions import InvalidInput, InvariantViolation


def search_cumulative(draw, cumulative):
    """
    Binary search of the index i such that cumulative[i-1] < draw <= cumulative[i]. For i = 0, only draw <= cumulative[0] is required, so that a draw of exactly 0 falls on the first index.

    Args:
        draw (float in [0, 1)): Uniform random draw.
        cumulative (Array of shape (n_items,)): Non-decreasing cumulative sums of a distribution, ending at 1.

    Returns the index as an int. Raises InvalidInput if the draw is not in [0, 1), and InvariantViolation if no index satisfies the condition, which means 'cumulative' is not a valid cumulative distribution.
    """
    if not 0 <= draw < 1:
        raise InvalidInput(f'Draws must be in [0, 1), got {draw}.')

    start, end = 0, len(cumulative)
    while start < end:
        mid = start + (end - start)//2
        if cumulative[mid] < draw:
            start = mid + 1
        else:
            end = mid

    if start == len(cumulative) or not (draw <= cumulative[start] and (start == 0 or cumulative[start-1] < draw)):
        raise InvariantViolation(f'Search did not find a valid index for draw {draw}. Is the cumulative distribution valid?')
    return start


class Distribution:
    """
    Weighting of the training examples for one label. The weights are stored in a numpy array 'p' which is updated in place by the boosting algorithm.
    """
    def __init__(self, p):
        """
        p (Array-like of shape (n_items,)): Non-negative weights, expected to sum to 1.
        """
        self.p = np.asarray(p, dtype=float)

    @classmethod
    def uniform(cls, n_items):
        """
        Returns a distribution of 'n_items' weights, each equal to 1/n_items.
        """
        if n_items < 1:
            raise InvalidInput(f'A distribution needs at least one item, got {n_items}.')
        return cls(np.full(n_items, 1/n_items))

    @property
    def cumulative(self):
        return np.cumsum(self.p)

    def sample(self, draw):
        """
        Draws a sample weighted by the distribution.

        Args:
            draw (float in [0, 1)): Uniform random draw, provided by the caller's random source.

        Returns the index of the sample.
        """
        return search_cumulative(draw, self.cumulative)

    def resample(self, n_samples, random_state=None):
        """
        Draws 'n_samples' indices weighted by the distribution.

        Args:
            n_samples (int): Number of indices to draw.
            random_state (None, int or numpy RandomState, optional): Random source of the draws, as accepted by sklearn's 'check_random_state'.

        Returns an array of shape (n_samples,) of indices.
        """
        random_state = check_random_state(random_state)
        cumulative = self.cumulative
        draws = random_state.random_sample(n_samples)
        return np.array([search_cumulative(draw, cumulative) for draw in draws], dtype=int)

    def total(self):
        return float(np.sum(self.p))

    def copy(self):
        return type(self)(self.p.copy())

    def __len__(self):
        return len(self.p)

    def __getitem__(self, idx):
        return self.p[idx]

    def __repr__(self):
        return f'Distribution({self.p!r})'


def uniform_distribution(n_items):
    return Distribution.uniform(n_items)
