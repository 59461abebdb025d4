import numpy as np

from .exceptions import InvalidInput


class LabelEncoder:
    """
    Class that fixes the order of the labels and encodes the label membership of examples as +1 (label present) or -1 (label absent).

    The labels are sorted so that every iteration over the labels, and thus every tie between features, is resolved the same way from one run to another.
    """
    def __init__(self, labels):
        """
        labels (Iterable of hashable and orderable labels): Known labels. Duplicates are ignored.
        """
        self.labels = sorted(set(labels))
        if not self.labels:
            raise InvalidInput('At least one label is needed to encode examples.')

        self.labels_to_idx = {label:idx for idx, label in enumerate(self.labels)}
        self.n_labels = len(self.labels)

    @classmethod
    def from_examples(cls, examples):
        """
        Returns a LabelEncoder over the union of the labels of the examples.
        """
        return cls(label for example in examples for label in example.labels())

    def encode_labels(self, examples):
        """
        examples (Sequence of Example objects): Examples to encode.

        Returns an array of shape (n_examples, n_labels) where entry (i, l) is +1 if example i has label l and -1 otherwise.
        """
        encoded_Y = -np.ones((len(examples), self.n_labels))
        for i, example in enumerate(examples):
            for j, label in enumerate(self.labels):
                if example.has_label(label):
                    encoded_Y[i,j] = 1
        return encoded_Y

    def decode_labels(self, encoded_Y):
        """
        encoded_Y (Array of shape (n_examples, n_labels)): Array of encoded labels. It can contain real numbers, for instance in the case where encoded_Y are predictions.

        A label is decoded as present when its score is strictly positive.

        Returns a list of lists of labels.
        """
        return [[label for label, score in zip(self.labels, scores) if score > 0] for scores in encoded_Y]

    def __len__(self):
        return self.n_labels

    def __iter__(self):
        yield from self.labels

    def __contains__(self, label):
        return label in self.labels_to_idx
