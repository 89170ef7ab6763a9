import numpy as np
import pytest

from critter_world.body.limbs import Step
from critter_world.body.skeleton import ROOT
from critter_world.core.angles import wrap_angle
from critter_world.core.input import InputSnapshot
from critter_world.creature.creature import Creature
from critter_world.creature.species import MotionParams


def far_snapshot(critter, angle: float, dist: float = 2000.0) -> InputSnapshot:
    return InputSnapshot(x=critter.x + dist * np.cos(angle),
                         y=critter.y + dist * np.sin(angle))


def test_creature_ids_are_unique() -> None:
    a = Creature(0.0, 0.0)
    b = Creature(0.0, 0.0)
    assert a.creature_id != b.creature_id
    assert b.creature_id.startswith('L')


def test_motion_params_scale_with_size() -> None:
    params = MotionParams.for_size(3.0)
    assert params.f_accel == pytest.approx(30.0)
    assert params.f_fric == pytest.approx(6.0)
    assert params.r_accel == pytest.approx(MotionParams().r_accel)


def test_bare_creature_accelerates_toward_target() -> None:
    critter = Creature(0.0, 0.0, 0.0)
    snap = InputSnapshot(x=500.0, y=0.0)
    critter.follow(snap)
    # f_speed = (0 + 10) * 0.5, speed = 5 - 2
    assert critter.f_speed == pytest.approx(5.0)
    assert critter.speed == pytest.approx(3.0)
    assert critter.x == pytest.approx(3.0)
    for _ in range(40):
        critter.follow(snap)
    assert critter.speed == pytest.approx(8.0)


def test_no_thrust_inside_threshold() -> None:
    critter = Creature(0.0, 0.0, 0.0)
    assert critter.thrust(critter.params.f_thresh) == 0.0
    critter.follow(InputSnapshot(x=10.0, y=0.0))
    assert critter.f_speed == 0.0
    assert critter.speed == 0.0


def test_heading_turns_the_short_way_through_pi() -> None:
    critter = Creature(0.0, 0.0, angle=3.0)
    target_angle = wrap_angle(3.0 + 3 * np.pi / 4)
    snap = far_snapshot(critter, target_angle)

    critter.follow(snap)
    assert critter.r_speed > 0
    assert -np.pi < critter.abs_angle <= np.pi

    converged_at = None
    for tick in range(1, 40):
        offset = snap.target - critter.pose.pos
        error = wrap_angle(critter.abs_angle - np.arctan2(offset[1], offset[0]))
        if abs(error) < critter.params.r_thresh:
            converged_at = tick
            break
        critter.follow(snap)
        assert -np.pi < critter.abs_angle <= np.pi
    assert converged_at is not None


def test_rotation_friction_stops_small_spin() -> None:
    critter = Creature(0.0, 0.0, 0.0)
    critter.r_speed = 0.1
    critter.follow(InputSnapshot(x=500.0, y=0.0))
    assert critter.r_speed == 0.0


# =============================================================================
# THRUST / GAIT COUPLING
# =============================================================================

def test_thrust_scales_with_planted_legs(lizard) -> None:
    legs = [s for s in lizard.systems if s.is_leg]
    f_accel = lizard.params.f_accel
    assert lizard.thrust(1000.0) == pytest.approx(f_accel)

    for leg in legs[:len(legs) // 2]:
        leg.gait.step = Step.SWINGING
    assert lizard.thrust(1000.0) == pytest.approx(f_accel / 2)


def test_no_thrust_with_every_leg_swinging(lizard) -> None:
    for leg in lizard.systems:
        leg.gait.step = Step.SWINGING
    assert lizard.planted_fraction() == 0.0
    assert lizard.thrust(1000.0) == 0.0

    lizard.f_speed = 0.0
    lizard._update_forward(1000.0)
    assert lizard.f_speed == 0.0
    assert lizard.speed == 0.0


def test_plain_limb_gives_no_ground_contact() -> None:
    critter = Creature(0.0, 0.0, 0.0)
    arm = critter.skeleton.add_segment(ROOT, 10.0, 0.0, 1.0, 2.0)
    limb = critter.add_limb(arm, 1, 1.0)
    assert not limb.is_leg
    assert critter.planted_fraction() == 0.0
    assert critter.thrust(1000.0) == 0.0


# =============================================================================
# SKELETON DRAG
# =============================================================================

def test_body_trails_behind_the_head(lizard) -> None:
    snap = InputSnapshot(x=lizard.x + 2000.0, y=lizard.y)
    for _ in range(150):
        lizard.follow(snap)
    neck = lizard.skeleton.children[ROOT][0]
    assert lizard.skeleton.pos[neck][0] < lizard.x


def test_follow_keeps_angle_relation_below_the_head(lizard) -> None:
    sk = lizard.skeleton
    snap = InputSnapshot(x=lizard.x + 500.0, y=lizard.y + 300.0)
    for _ in range(30):
        lizard.follow(snap)
    for i in range(len(sk)):
        if int(sk.parent[i]) == ROOT:
            continue
        assert sk.abs_angle[i] == pytest.approx(sk.parent_angle(i) + sk.rel_angle[i])


def test_lifetime_tracker_records_motion(lizard) -> None:
    snap = InputSnapshot(x=lizard.x + 2000.0, y=lizard.y)
    for _ in range(50):
        lizard.follow(snap)
    tracker = lizard.lifetime_tracker
    assert lizard.step_count == 50
    assert tracker.last_update_step == 50
    assert tracker.total_distance > 0
    assert tracker.leg_count == 4
    assert 0 <= tracker.planted_count <= 4
    assert tracker.max_speed_achieved >= lizard.speed


# =============================================================================
# DRAWING
# =============================================================================

def test_draw_head_then_every_bond(lizard, surface) -> None:
    lizard.draw(surface)
    assert surface.ops[0][0] == 'arc'
    _, center, radius, start, end = surface.ops[0]
    assert center == pytest.approx((lizard.x, lizard.y))
    assert end - start == pytest.approx(1.5 * np.pi)
    assert surface.count('arc') == 1
    assert surface.count('line') == 2 + len(lizard.skeleton)


def test_follow_draws_only_with_a_surface(lizard, surface) -> None:
    lizard.follow(InputSnapshot(x=0.0, y=0.0))
    lizard.follow(InputSnapshot(x=0.0, y=0.0), surface)
    assert surface.count('arc') == 1
