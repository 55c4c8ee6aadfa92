# tests/test_delta.py

import unittest

from regex_anfa.automaton.delta import Delta, Transition, TransitionKind
from regex_anfa.errors import InternalInvariantViolation, StateLimitExceeded


class TestTransition(unittest.TestCase):

    def test_shapes(self):
        """Test the three record shapes and their predicates"""
        empty = Transition.empty()
        self.assertIs(empty.kind, TransitionKind.EMPTY)
        self.assertTrue(empty.is_empty)
        self.assertFalse(empty.is_epsilon)

        labeled = Transition.single(3, 'a')
        self.assertEqual(labeled.targets, (3,))
        self.assertEqual(labeled.label, 'a')
        self.assertFalse(labeled.is_epsilon)

        self.assertTrue(Transition.single(3).is_epsilon)

        fork = Transition.fork(1, 2)
        self.assertEqual(fork.targets, (1, 2))
        self.assertTrue(fork.is_epsilon)

    def test_invalid_records(self):
        """Test that records breaking the two-edge invariant are rejected"""
        with self.assertRaises(ValueError):
            Transition(TransitionKind.FORK, 'a', (1, 2))
        with self.assertRaises(ValueError):
            Transition(TransitionKind.FORK, None, (1,))
        with self.assertRaises(ValueError):
            Transition(TransitionKind.SINGLE, None, (1, 2))
        with self.assertRaises(ValueError):
            Transition(TransitionKind.EMPTY, None, (1,))
        with self.assertRaises(ValueError):
            Transition.single(-1)

    def test_equality(self):
        self.assertEqual(Transition.single(1, 'a'), Transition.single(1, 'a'))
        self.assertNotEqual(Transition.single(1, 'a'), Transition.single(1))


class TestDelta(unittest.TestCase):

    def test_append_is_dense(self):
        """Test that appended states get consecutive indices"""
        delta = Delta()
        self.assertEqual(delta.append(Transition.empty()), 0)
        self.assertEqual(delta.append(Transition.single(0, 'x')), 1)
        self.assertEqual(len(delta), 2)
        self.assertIn(1, delta)
        self.assertNotIn(2, delta)
        self.assertNotIn(-1, delta)
        self.assertEqual(delta.targets(1), (0,))

    def test_contains_accepts_integral_indices(self):
        """Test membership for indices read back from the table view"""
        delta = Delta()
        delta.append(Transition.empty())
        delta.append(Transition.empty())
        q = delta.to_frame()['q'].iloc[1]
        self.assertIn(q, delta)
        self.assertEqual(delta[q], Transition.empty())
        self.assertNotIn('1', delta)
        self.assertNotIn(1.0, delta)

    def test_targets_are_plain_ints(self):
        delta = Delta()
        delta.append(Transition.empty())
        q = delta.to_frame()['q'].iloc[0]
        record = Transition.fork(q, q)
        self.assertTrue(all(type(t) is int for t in record.targets))
        with self.assertRaises(TypeError):
            Transition.single(1.5)

    def test_patch_empty_slot(self):
        delta = Delta()
        q = delta.append(Transition.empty())
        delta.patch(q, Transition.single(q))
        self.assertEqual(delta[q], Transition.single(q))

    def test_patch_rejects_patched_slot(self):
        """Test that a slot can only be patched while empty"""
        delta = Delta()
        q = delta.append(Transition.single(0, 'a'))
        with self.assertRaises(InternalInvariantViolation):
            delta.patch(q, Transition.empty())
        self.assertEqual(delta[q], Transition.single(0, 'a'))

    def test_state_limit(self):
        delta = Delta(max_states=2)
        delta.append(Transition.empty())
        with self.assertRaises(StateLimitExceeded):
            delta.reserve(2)
        delta.append(Transition.empty())
        with self.assertRaises(StateLimitExceeded) as ctx:
            delta.append(Transition.empty())
        self.assertEqual(ctx.exception.limit, 2)
        self.assertEqual(len(delta), 2)

    def test_to_frame(self):
        """Test the tabular view of the state table"""
        delta = Delta()
        delta.append(Transition.single(1, 'a'))
        delta.append(Transition.empty())
        frame = delta.to_frame()
        self.assertEqual(list(frame.columns), ['q', 'kind', 'label', 'targets'])
        self.assertEqual(len(frame), 2)
        self.assertEqual(frame.iloc[0]['kind'], 'SINGLE')
        self.assertEqual(frame.iloc[0]['label'], 'a')
        self.assertEqual(frame.iloc[1]['kind'], 'EMPTY')

    def test_empty_frame(self):
        frame = Delta().to_frame()
        self.assertTrue(frame.empty)
        self.assertEqual(list(frame.columns), ['q', 'kind', 'label', 'targets'])


if __name__ == '__main__':
    unittest.main()
