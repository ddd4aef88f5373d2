from load_optimizer.solvers.cluster_taper import prescribe_cluster_taper_sets
from load_optimizer.solvers.myo_rep import build_myo_rep_scheme, is_myo_rep_session
from load_optimizer.solvers.tapered import prescribe_tapered_sets

__all__ = [
    "build_myo_rep_scheme",
    "is_myo_rep_session",
    "prescribe_cluster_taper_sets",
    "prescribe_tapered_sets",
]
