from typing import Self
from enum import Enum
import logging

from trialdata.model.model import UnresolvedCategory
from trialdata.signals.labels import get_joint_labels, get_marker_labels, get_motor_control_labels, get_muscle_labels


class SignalCategory(Enum):
    """Known continuous signal categories, each with a fixed rule for expanding to channel labels."""

    POS = "pos"
    VEL = "vel"
    ACC = "acc"
    FORCE = "force"
    MOTOR_CONTROL = "motor_control"
    MARKERS = "markers"
    JOINT_ANG = "joint_ang"
    JOINT_VEL = "joint_vel"
    MUSCLE_LEN = "muscle_len"
    MUSCLE_VEL = "muscle_vel"
    OPENSIM_HAND_POS = "opensim_hand_pos"
    OPENSIM_HAND_VEL = "opensim_hand_vel"
    OPENSIM_HAND_ACC = "opensim_hand_acc"
    OPENSIM_ELBOW_POS = "opensim_elbow_pos"
    OPENSIM_ELBOW_VEL = "opensim_elbow_vel"
    OPENSIM_ELBOW_ACC = "opensim_elbow_acc"

    @classmethod
    def from_token(cls, token: str) -> Self:
        """Look up a category by name, ignoring case.  Raises UnresolvedCategory for unknown names."""
        try:
            return cls(token.lower())
        except (ValueError, AttributeError):
            raise UnresolvedCategory(f"Unknown signal category: {token!r}") from None

    def labels(self) -> list[str]:
        """Expand this category into its ordered channel labels."""
        match self:
            case SignalCategory.POS:
                return ["x", "y"]
            case SignalCategory.VEL:
                return ["vx", "vy"]
            case SignalCategory.ACC:
                return ["ax", "ay"]
            case SignalCategory.FORCE:
                return ["fx", "fy", "fz", "mx", "my", "mz"]
            case SignalCategory.MOTOR_CONTROL:
                return get_motor_control_labels()
            case SignalCategory.MARKERS:
                return get_marker_labels()
            case SignalCategory.JOINT_ANG:
                return [joint + "_ang" for joint in get_joint_labels()]
            case SignalCategory.JOINT_VEL:
                return [joint + "_vel" for joint in get_joint_labels()]
            case SignalCategory.MUSCLE_LEN:
                return [muscle + "_len" for muscle in get_muscle_labels()]
            case SignalCategory.MUSCLE_VEL:
                return [muscle + "_muscVel" for muscle in get_muscle_labels()]
            case _:
                # opensim_<point>_<quantity> -> X_<point><Quantity>, Y_..., Z_...
                (_, point, quantity) = self.value.split("_")
                suffix = "_" + point + quantity.capitalize()
                return [axis + suffix for axis in ["X", "Y", "Z"]]


def resolve(token: str, strict: bool = False) -> list[str]:
    """Get the ordered channel labels for a continuous signal category name, like "vel" or "markers".

    Unknown names raise UnresolvedCategory when strict.
    Otherwise they log a warning and resolve to an empty list of labels.
    """
    try:
        category = SignalCategory.from_token(token)
    except UnresolvedCategory:
        if strict:
            raise
        logging.warning(f"Unknown signal category {token!r} will have no channel labels.")
        return []
    return category.labels()


def resolve_all(tokens: list[str], strict: bool = False) -> list[list[str]]:
    """Resolve each category name in order, giving one label list per name."""
    return [resolve(token, strict) for token in tokens]


def check_event_name(name: str, strict: bool = False) -> bool:
    """Check that an event name refers to a trial table time column, like "startTime" or "goCueTime".

    Returns True for good names.
    Other names raise UnresolvedCategory when strict, or log a warning and return False.
    """
    if isinstance(name, str) and name.endswith("Time"):
        return True

    message = f"Event name {name!r} does not end in 'Time' and may not match any trial table column."
    if strict:
        raise UnresolvedCategory(message)
    logging.warning(message)
    return False
