import numpy as np
import pytest

from critter_world.body.limbs import LimbSystem
from critter_world.body.skeleton import Skeleton, Pose, ROOT
from critter_world.core.input import InputSnapshot


def straight_chain():
    sk = Skeleton(Pose.at(0.0, 0.0, 0.0))
    a = sk.add_segment(ROOT, 20.0, 0.0, np.pi / 2, 2.0)
    b = sk.add_segment(a, 20.0, 0.0, np.pi / 2, 2.0)
    c = sk.add_segment(b, 10.0, 0.0, np.pi / 2, 2.0)
    return sk, (a, b, c)


def side_leg():
    """One lizard-style leg hanging off the root: hip, humerus, forearm, toes."""
    sk = Skeleton(Pose.at(0.0, 0.0, 0.0))
    hip = sk.add_segment(ROOT, 12.0, 0.785, 0, 8)
    humerus = sk.add_segment(hip, 16.0, -0.785, 6.28, 1)
    forearm = sk.add_segment(humerus, 16.0, 1.571, 3.1415, 2)
    toes = [sk.add_segment(forearm, 4.0, (t / 3 - 0.5) * 1.571, 0.1, 4) for t in range(4)]
    leg = LimbSystem.leg(sk, forearm, 2, 6.0, 0.0)
    return sk, leg, toes


# =============================================================================
# CHAIN CONSTRUCTION
# =============================================================================

def test_chain_collects_nodes_hip_first() -> None:
    sk, (a, b, c) = straight_chain()
    limb = LimbSystem(sk, c, 2, 1.0)
    assert limb.nodes == [b, c]
    assert limb.length == 2
    assert limb.hip == a


def test_chain_truncates_at_root() -> None:
    sk, (a, b, c) = straight_chain()
    limb = LimbSystem(sk, c, 10, 1.0)
    assert limb.nodes == [a, b, c]
    assert limb.length == 3
    assert limb.hip == ROOT
    np.testing.assert_allclose(limb.hip_pos, [0.0, 0.0])


def test_chain_length_must_be_positive() -> None:
    sk, (_, _, c) = straight_chain()
    with pytest.raises(ValueError):
        LimbSystem(sk, c, 0, 1.0)


def test_plain_limb_is_not_a_leg() -> None:
    sk, (_, _, c) = straight_chain()
    limb = LimbSystem(sk, c, 3, 1.0)
    assert not limb.is_leg
    assert not limb.is_planted


# =============================================================================
# INVERSE KINEMATICS
# =============================================================================

def test_effector_travel_is_capped_by_speed() -> None:
    sk, (_, _, c) = straight_chain()
    limb = LimbSystem(sk, c, 3, 2.5)
    target = np.array([30.0, 30.0])
    before = np.hypot(*(target - sk.pos[c]))
    limb.move_to(target)
    after = np.hypot(*(target - sk.pos[c]))
    assert after == pytest.approx(before - 2.5)


def test_effector_lands_on_target_within_speed() -> None:
    sk, (_, _, c) = straight_chain()
    limb = LimbSystem(sk, c, 3, 5.0)
    limb.move_to((48.0, 1.0))
    np.testing.assert_allclose(sk.pos[c], [48.0, 1.0], atol=1e-9)


def test_chain_converges_on_reachable_target() -> None:
    sk, (a, b, c) = straight_chain()
    sk.rel_angle[a] = 0.3
    sk.rel_angle[b] = -0.4
    sk.update_relative(a, recurse=True)
    limb = LimbSystem(sk, c, 3, 1.0)
    target = np.array([50.0, 0.0])
    assert np.hypot(*(sk.pos[c] - target)) > 1.0

    for _ in range(200):
        limb.move_to(target)

    assert np.hypot(*(sk.pos[c] - target)) < 1.0
    for node in (a, b, c):
        assert abs(sk.rel_angle[node]) <= np.pi / 4 + 1e-9


def test_move_to_keeps_chain_angles_consistent() -> None:
    sk, (a, b, c) = straight_chain()
    limb = LimbSystem(sk, c, 2, 3.0)
    for step in range(10):
        limb.move_to((20.0 + step, 15.0))
        for node in (b, c):
            assert sk.abs_angle[node] == pytest.approx(sk.parent_angle(node) + sk.rel_angle[node])


def test_side_branches_follow_the_chain_passively() -> None:
    sk, leg, toes = side_leg()
    leg.gait = None
    for _ in range(5):
        leg.move_to((10.0, 40.0))
    forearm = leg.end
    for i, toe in enumerate(toes):
        assert sk.rel_angle[toe] == pytest.approx(sk.def_angle[toe])
        angle = sk.abs_angle[forearm] + sk.rel_angle[toe]
        expected = sk.pos[forearm] + 4.0 * np.array([np.cos(angle), np.sin(angle)])
        np.testing.assert_allclose(sk.pos[toe], expected, atol=1e-9)


def test_plain_limb_reaches_for_pointer() -> None:
    sk, (_, _, c) = straight_chain()
    limb = LimbSystem(sk, c, 3, 2.0)
    snap = InputSnapshot(x=10.0, y=35.0)
    before = np.hypot(*(snap.target - sk.pos[c]))
    limb.update(snap)
    after = np.hypot(*(snap.target - sk.pos[c]))
    assert after == pytest.approx(before - 2.0)
