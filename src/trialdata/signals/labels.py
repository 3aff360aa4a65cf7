"""Fixed channel name tables for EMG, joints, muscles, and motion tracking markers.

The tables are module-level tuples so they can't be changed by callers.
The get_* functions return fresh lists, which callers are free to modify.
"""

EMG_NAMES = (
    "BiMed",
    "FCR",
    "FCU",
    "FDS",
    "DeltAnt",
    "DeltMid",
    "DeltPos",
    "Trap",
    "Lat",
    "TerMaj",
    "InfSpin",
    "TriMid",
    "TriLat",
    "TriMed",
    "Brad",
    "ECRb",
    "ECU",
    "EDC",
    "PecSup",
    "PecInf",
    "Brach",
    "BiLat",
)
"""Canonical EMG channel order, used everywhere EMG appears."""

JOINT_NAMES = (
    "shoulder_adduction",
    "shoulder_rotation",
    "shoulder_flexion",
    "elbow_flexion",
    "radial_pronation",
    "wrist_flexion",
    "wrist_abduction",
)

MUSCLE_NAMES = (
    "abd_poll_longus",
    "anconeus",
    "bicep_lh",
    "bicep_sh",
    "brachialis",
    "brachioradialis",
    "coracobrachialis",
    "deltoid_ant",
    "deltoid_med",
    "deltoid_pos",
    "dorsoepitrochlearis",
    "ext_carpi_rad_longus",
    "ext_carp_rad_brevis",
    "ext_carpi_ulnaris",
    "ext_digitorum",
    "ext_digiti",
    "ext_indicis",
    "flex_carpi_radialis",
    "flex_carpi_ulnaris",
    "flex_digit_profundus",
    "flex_digit_superficialis",
    "flex_poll_longus",
    "infraspinatus",
    "lat_dorsi_sup",
    "lat_dorsi_cen",
    "lat_dorsi_inf",
    "palmaris_longus",
    "pectoralis_sup",
    "pectoralis_inf",
    "pronator_quad",
    "pronator_teres",
    "subscapularis",
    "supinator",
    "supraspinatus",
    "teres_major",
    "teres_minor",
    "tricep_lat",
    "tricep_lon",
    "tricep_sho",
)

MARKER_BASE_NAMES = (
    "Marker_1",
    "Marker_2",
    "Marker_3",
    "Marker_4",
    "Marker_5",
    "Marker_6",
    "Marker_7",
    "Marker_8",
    "Shoulder_JC",
    "Pronation_Pt1",
)

# Axis order of each marker as stored in the raw session format.
RAW_MARKER_AXES = ("_y", "_z", "_x")

MOTOR_CONTROL_NAMES = (
    "MotorControlSho",
    "MotorControlElb",
)


def get_emg_names() -> list[str]:
    return list(EMG_NAMES)


def get_joint_labels() -> list[str]:
    return list(JOINT_NAMES)


def get_muscle_labels() -> list[str]:
    return list(MUSCLE_NAMES)


def get_motor_control_labels() -> list[str]:
    return list(MOTOR_CONTROL_NAMES)


def get_marker_labels(raw: bool = False) -> list[str]:
    """Get the 3-axis marker labels, one per base point and axis.

    By default the labels are sorted as plain strings (case-sensitive), which is the order
    used for marker columns in loaded trial data.  This is not grouped by base point:
    "Marker_1_x", "Marker_1_y", "Marker_1_z", "Marker_2_x", ..., "Pronation_Pt1_x", ..., "Shoulder_JC_z".

    Pass raw=True to get the order used by the raw session format instead:
    y, z, x for each base point, in base point order.
    """
    raw_labels = [base + axis for base in MARKER_BASE_NAMES for axis in RAW_MARKER_AXES]
    if raw:
        return raw_labels
    return sorted(raw_labels)
