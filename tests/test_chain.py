import unittest

import numpy as np

from sunflower.core.vector import Vec2
from sunflower.core.chain import Chain, ChainSolver, stretch_factor


def vertical_chain(count, spacing, base):
    """Joints stacked straight up from `base`"""
    return Chain(
        joints=[Vec2(base.x, base.y - i * spacing) for i in range(count)],
        segment_length=50.0,
    )


class TestStretchFactor(unittest.TestCase):
    def test_ratio_of_distance_to_rest_length(self):
        self.assertAlmostEqual(stretch_factor(Vec2(400, 50), Vec2(400, 550), 10, 50), 1.0)
        self.assertAlmostEqual(stretch_factor(Vec2(400, 500), Vec2(400, 550), 10, 50), 0.1)

    def test_not_clamped(self):
        self.assertAlmostEqual(stretch_factor(Vec2(400, -950), Vec2(400, 550), 10, 50), 3.0)

    def test_sun_on_anchor_gives_zero(self):
        self.assertEqual(stretch_factor(Vec2(400, 550), Vec2(400, 550), 10, 50), 0.0)

    def test_zero_rest_length(self):
        self.assertEqual(stretch_factor(Vec2(1, 1), Vec2(0, 0), 0, 50), 0.0)


class TestChain(unittest.TestCase):
    def test_collinear_layout(self):
        chain = Chain.collinear(10, 50, y=300)
        self.assertEqual(len(chain), 10)
        self.assertEqual(chain.base, Vec2(0, 300))
        self.assertEqual(chain.tip, Vec2(450, 300))
        self.assertEqual(chain.rest_length, 500)
        np.testing.assert_allclose(chain.segment_lengths(), [50.0] * 9)

    def test_copy_is_deep(self):
        chain = Chain.collinear(3, 10, y=0)
        clone = chain.copy()
        clone.joints[0].x = 99
        self.assertEqual(chain.joints[0].x, 0)


class TestChainSolver(unittest.TestCase):
    def setUp(self):
        self.solver = ChainSolver()
        self.anchor = Vec2(400, 550)

    def test_forward_pass_pins_tip_on_target(self):
        chain = Chain.collinear(10, 50, y=300)
        target = Vec2(123.5, 77.25)

        self.solver.forward_pass(chain, target, 1.0)

        self.assertEqual(chain.tip, target)
        np.testing.assert_allclose(chain.segment_lengths(), [50.0] * 9)

    def test_backward_pass_pins_base_on_anchor(self):
        chain = Chain.collinear(10, 50, y=300)
        self.solver.backward_pass(chain, self.anchor, 0.5)

        self.assertEqual(chain.base, self.anchor)
        np.testing.assert_allclose(chain.segment_lengths(), [25.0] * 9)

    def test_base_is_exactly_anchor_after_solve(self):
        chain = Chain.collinear(10, 50, y=300)
        for target in (Vec2(10, 10), Vec2(790, 20), Vec2(400, 549), Vec2(-100, 900)):
            stretch = stretch_factor(target, self.anchor, len(chain), chain.segment_length)
            self.solver.solve(chain, self.anchor, target, stretch, desired_gap=80)
            self.assertEqual(chain.base, self.anchor)

    def test_segments_scaled_by_stretch(self):
        chain = Chain.collinear(10, 50, y=300)
        target = Vec2(250, 120)
        stretch = stretch_factor(target, self.anchor, 10, 50)

        self.solver.solve(chain, self.anchor, target, stretch, desired_gap=120)

        lengths = chain.segment_lengths()
        np.testing.assert_allclose(lengths[:-2], [50 * stretch] * 7)
        self.assertAlmostEqual(lengths[-1], 120)

    def test_sun_near_anchor_collapses_chain(self):
        """Sun 50 px above the base: stretch 0.1, every segment 5 px"""
        chain = Chain.collinear(10, 50, y=300)
        target = Vec2(400, 500)
        stretch = stretch_factor(target, self.anchor, 10, 50)
        self.assertAlmostEqual(stretch, 0.1)

        self.solver.solve(chain, self.anchor, target, stretch, desired_gap=5.0)

        np.testing.assert_allclose(chain.segment_lengths(), [5.0] * 9, atol=1e-9)
        for joint in chain.joints:
            self.assertLessEqual(joint.distance_to(self.anchor), 45.0 + 1e-9)

    def test_target_at_full_reach_gives_straight_stem(self):
        # Sun directly above the base at exactly N * L
        chain = vertical_chain(10, 40, self.anchor)
        target = Vec2(400, 50)
        stretch = stretch_factor(target, self.anchor, 10, 50)
        self.assertAlmostEqual(stretch, 1.0)

        self.solver.solve(chain, self.anchor, target, stretch, desired_gap=50)

        for i, joint in enumerate(chain.joints):
            self.assertAlmostEqual(joint.x, 400.0)
            self.assertAlmostEqual(joint.y, 550.0 - 50.0 * i)
        # N joints span only N-1 segments, so the tip stops one link short
        self.assertAlmostEqual(chain.tip.distance_to(target), 50.0)

    def test_gap_moves_only_second_to_last_joint(self):
        chain = vertical_chain(10, 10, self.anchor)
        target = Vec2(400, 450)
        stretch = stretch_factor(target, self.anchor, 10, 50)
        self.assertAlmostEqual(stretch, 0.2)

        reference = self.solver.solve(chain.copy(), self.anchor, target, stretch)
        self.assertAlmostEqual(reference.segment_lengths()[-1], 10.0)

        self.solver.solve(chain, self.anchor, target, stretch, desired_gap=200)

        self.assertAlmostEqual(chain.joints[-1].distance_to(chain.joints[-2]), 200.0)
        self.assertEqual(chain.tip, reference.tip)
        for moved, kept in zip(chain.joints[:-2], reference.joints[:-2]):
            self.assertEqual(moved, kept)
        # Pushed away from the tip along the same line
        self.assertAlmostEqual(chain.joints[-2].x, 400.0)
        self.assertAlmostEqual(chain.joints[-2].y, 660.0)

    def test_adjust_gap_ignores_coincident_pair(self):
        chain = Chain(joints=[Vec2(0, 0), Vec2(5, 5), Vec2(5, 5)])
        ChainSolver.adjust_gap(chain, 100)
        self.assertEqual(chain.joints[-2], Vec2(5, 5))

    def test_coincident_joints_produce_no_nan(self):
        chain = Chain(joints=[Vec2(0, 0) for _ in range(6)], segment_length=20)
        anchor = Vec2(0, 100)
        target = Vec2(0, 0)
        stretch = stretch_factor(target, anchor, 6, 20)

        self.solver.solve(chain, anchor, target, stretch, desired_gap=30)

        for joint in chain.joints:
            self.assertTrue(joint.is_finite())
        np.testing.assert_allclose(chain.segment_lengths()[:-2], [20 * stretch] * 3)

    def test_zero_stretch_collapses_onto_anchor(self):
        chain = Chain.collinear(5, 50, y=100)
        anchor = Vec2(200, 300)

        self.solver.solve(chain, anchor, anchor, stretch=0.0)

        for joint in chain.joints:
            self.assertEqual(joint, anchor)

    def test_random_targets_keep_invariants(self):
        rng = np.random.default_rng(7)
        chain = Chain.collinear(10, 50, y=300)

        for _ in range(50):
            target = Vec2(*rng.uniform(-200, 1000, size=2))
            gap = float(rng.uniform(50, 200))
            stretch = stretch_factor(target, self.anchor, 10, 50)

            self.solver.solve(chain, self.anchor, target, stretch, desired_gap=gap)

            self.assertEqual(chain.base, self.anchor)
            lengths = chain.segment_lengths()
            np.testing.assert_allclose(lengths[:-2], [50 * stretch] * 7, rtol=1e-9, atol=1e-9)
            self.assertAlmostEqual(lengths[-1], gap)
            self.assertTrue(all(j.is_finite() for j in chain.joints))

    def test_empty_chain_is_returned_unchanged(self):
        chain = Chain()
        self.assertIs(self.solver.solve(chain, self.anchor, Vec2(1, 1)), chain)
        self.assertEqual(len(chain), 0)


if __name__ == '__main__':
    unittest.main()
