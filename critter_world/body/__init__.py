"""Body systems - skeleton arena and IK limbs."""

from .skeleton import Skeleton, Segment, Pose, ROOT
from .limbs import LimbSystem, GaitState, Step
