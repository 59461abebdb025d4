import unittest as ut
import numpy as np

from labelboost.weak_learner.decision_stump import DecisionStumper
from labelboost.distribution import Distribution, uniform_distribution
from labelboost.example import MultiLabelExample, AttributeFeature, PredicateFeature
from labelboost.exceptions import InvalidInput


def uniform_distributions(labels, n_examples):
    return {label:uniform_distribution(n_examples) for label in labels}


class TestDecisionStumper(ut.TestCase):
    def setUp(self):
        self.examples = [MultiLabelExample(['A'], attributes=['x']),
                         MultiLabelExample(['A'], attributes=['x']),
                         MultiLabelExample(['B']),
                         MultiLabelExample(['B'])]
        self.perfect_feature = AttributeFeature('x')
        self.always_feature = PredicateFeature(lambda example: True, 'always')

    def test_activations(self):
        stumper = DecisionStumper([self.perfect_feature, self.always_feature], self.examples)
        answer = np.array([[True, True],
                           [True, True],
                           [False, True],
                           [False, True]])
        self.assertTrue(np.all(stumper.activations == answer))
        self.assertEqual(stumper.labels, ['A', 'B'])

    def test_confidence_on_minimal_dataset(self):
        examples = [MultiLabelExample(['L'], attributes=['x']), MultiLabelExample([])]
        stumper = DecisionStumper([AttributeFeature('x')], examples)
        stump = stumper.new_stump(uniform_distributions(['L'], 2))
        w_plus, w_minus = .5, 0.
        self.assertAlmostEqual(stump.confidence_rates['L'], .5*np.log((1+w_plus)/(1+w_minus)))

    def test_confidence_when_feature_active_on_negative_example(self):
        examples = [MultiLabelExample(['L']), MultiLabelExample([], attributes=['x'])]
        stumper = DecisionStumper([AttributeFeature('x')], examples)
        stump = stumper.new_stump(uniform_distributions(['L'], 2))
        w_plus, w_minus = 0., .5
        self.assertAlmostEqual(stump.confidence_rates['L'], .5*np.log((1+w_plus)/(1+w_minus)))
        self.assertLess(stump.confidence_rates['L'], 0)

    def test_selects_feature_minimizing_z(self):
        stumper = DecisionStumper([self.always_feature, self.perfect_feature], self.examples)
        stump = stumper.new_stump(uniform_distributions(['A', 'B'], 4))
        self.assertIs(stump.feature, self.perfect_feature)
        self.assertEqual(stump.feature_idx, 1)
        self.assertGreater(stump.confidence_rates['A'], 0)
        self.assertLess(stump.confidence_rates['B'], 0)

    def test_zt_sums_scores_of_all_features(self):
        # Z of the perfect feature is 0, Z of the feature always active is sqrt(.25) + sqrt(.25) = 1.
        stumper = DecisionStumper([self.perfect_feature, self.always_feature], self.examples)
        stump = stumper.new_stump(uniform_distributions(['A', 'B'], 4))
        self.assertAlmostEqual(stump.zt, 2.)

    def test_ties_go_to_first_feature(self):
        twin_feature = AttributeFeature('x')
        stumper = DecisionStumper([self.perfect_feature, twin_feature], self.examples)
        stump = stumper.new_stump(uniform_distributions(['A', 'B'], 4))
        self.assertIs(stump.feature, self.perfect_feature)

    def test_parallel_search_matches_serial_search(self):
        features = [self.always_feature, self.perfect_feature, self.always_feature, AttributeFeature('x')]
        serial_stump = DecisionStumper(features, self.examples, n_jobs=1).new_stump(uniform_distributions(['A', 'B'], 4))
        parallel_stump = DecisionStumper(features, self.examples, n_jobs=2).new_stump(uniform_distributions(['A', 'B'], 4))
        self.assertEqual(parallel_stump.feature_idx, serial_stump.feature_idx)
        self.assertEqual(parallel_stump.feature_idx, 1)
        self.assertEqual(parallel_stump.zt, serial_stump.zt)
        self.assertAlmostEqual(parallel_stump.zt, 4.)

    def test_parallel_search_gives_identical_stumps_on_many_features(self):
        random_state = np.random.RandomState(7)
        attributes = list(range(37))
        examples = [MultiLabelExample([str(label) for label in random_state.choice(['A', 'B', 'C'], size=random_state.randint(1, 3), replace=False)],
                                      attributes=[a for a in attributes if random_state.rand() < .4])
                    for _ in range(50)]
        features = [AttributeFeature(a) for a in attributes]
        distributions = {}
        for label in ['A', 'B', 'C']:
            weights = random_state.random_sample(50)
            distributions[label] = Distribution(weights/np.sum(weights))

        serial_stump = DecisionStumper(features, examples, n_jobs=1).new_stump(distributions)
        for n_jobs in [2, 3, 4]:
            parallel_stump = DecisionStumper(features, examples, n_jobs=n_jobs).new_stump(distributions)
            self.assertEqual(parallel_stump.feature_idx, serial_stump.feature_idx)
            self.assertEqual(parallel_stump.zt, serial_stump.zt)
            self.assertEqual(dict(parallel_stump.confidence_rates), dict(serial_stump.confidence_rates))

    def test_search_is_deterministic(self):
        stumper = DecisionStumper([self.always_feature, self.perfect_feature], self.examples)
        distributions = {'A':uniform_distribution(4), 'B':uniform_distribution(4)}
        distributions['A'].p[:] = [.1, .2, .3, .4]
        stump_1 = stumper.new_stump(distributions)
        stump_2 = stumper.new_stump(distributions)
        self.assertIs(stump_1.feature, stump_2.feature)
        self.assertEqual(dict(stump_1.confidence_rates), dict(stump_2.confidence_rates))
        self.assertEqual(stump_1.zt, stump_2.zt)

    def test_abstain_value_is_passed_to_stumps(self):
        stumper = DecisionStumper([self.perfect_feature], self.examples, abstain_value=0.)
        stump = stumper.new_stump(uniform_distributions(['A', 'B'], 4))
        self.assertEqual(stump.predict(self.examples[2], 'B'), 0.)

    def test_missing_distribution_raises(self):
        stumper = DecisionStumper([self.perfect_feature], self.examples)
        with self.assertRaises(InvalidInput):
            stumper.new_stump(uniform_distributions(['A'], 4))

    def test_wrong_number_of_weights_raises(self):
        stumper = DecisionStumper([self.perfect_feature], self.examples)
        with self.assertRaises(InvalidInput):
            stumper.new_stump(uniform_distributions(['A', 'B'], 3))

    def test_empty_inputs_raise(self):
        with self.assertRaises(InvalidInput):
            DecisionStumper([], self.examples)
        with self.assertRaises(InvalidInput):
            DecisionStumper([self.perfect_feature], [])
        with self.assertRaises(InvalidInput):
            DecisionStumper([self.perfect_feature], [MultiLabelExample([])])


if __name__ == '__main__':
    ut.main()
