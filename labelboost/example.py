from abc import ABC, abstractmethod


class Example(ABC):
    """
    Abstract training or test example. Concrete examples only need to expose their labels and to answer label membership.
    """
    @abstractmethod
    def labels(self):
        """
        Returns an iterable of the labels of the example.
        """
        raise NotImplementedError

    @abstractmethod
    def has_label(self, label):
        raise NotImplementedError


class Feature(ABC):
    """
    Abstract binary feature. 'test' returns True when the feature is active on the example. The string representation of the feature is its human-readable description.
    """
    @abstractmethod
    def test(self, example):
        raise NotImplementedError

    @abstractmethod
    def __str__(self):
        raise NotImplementedError

    def __repr__(self):
        return f'{type(self).__name__}({str(self)!r})'


class MultiLabelExample(Example):
    """
    Example carrying a set of labels and an optional set of attributes that features can test.
    """
    def __init__(self, labels, attributes=None):
        """
        Args:
            labels (Iterable of hashable): Labels of the example. Duplicates are ignored.
            attributes (Iterable of hashable, optional): Attributes of the example, tested by AttributeFeature. If None, the example has no attributes.
        """
        self._labels = frozenset(labels)
        self.attributes = frozenset(attributes or ())

    def labels(self):
        return sorted(self._labels)

    def has_label(self, label):
        return label in self._labels

    def __repr__(self):
        return f'MultiLabelExample(labels={self.labels()}, attributes={sorted(self.attributes)})'


class PredicateFeature(Feature):
    """
    Feature defined by any callable taking an example and returning a truth value.
    """
    def __init__(self, predicate, description):
        self.predicate = predicate
        self.description = description

    def test(self, example):
        return bool(self.predicate(example))

    def __str__(self):
        return self.description


class AttributeFeature(Feature):
    """
    Feature that is active when the example has the given attribute.
    """
    def __init__(self, attribute):
        self.attribute = attribute

    def test(self, example):
        return self.attribute in example.attributes

    def __str__(self):
        return f'has {self.attribute}'
