"""Presets and constants for the hybrid PSO solver."""


# ============= Coefficients =============
# CONSTRICTION: Clerc-Kennedy constriction factor for phi = phi1 + phi2 = 4.1.
# NOSTALGIA / SOCIAL: pull toward own best and toward the best neighbour.
CONSTRICTION = 0.7298
NOSTALGIA = 2.05
SOCIAL = 2.05


# ============= Scale-free topology =============
# M: edges added per particle during the attachment phase.
# M0: size of the seed clique the attachment phase starts from.
BA_M = 2
BA_M0 = 4

# Degree threshold: particles with more than K neighbours use the
# fully-informed rule, the rest follow their single best neighbour.
DEGREE_THRESHOLD = 5


# ============= Reporting =============
# Sweeps between progress lines at verbosity 2.
REPORT_EVERY = 100

VERBOSITY_LEVELS = (0, 1, 2)

NEIGHBORHOODS = ("full", "scale-free", "none")
NEIGHBORHOOD_ALIASES = {
    "ba": "scale-free",
    "scale_free": "scale-free",
    "scalefree": "scale-free",
    "gbest": "full",
}


# ============= Presets =============

# Quick smoke test: small swarm, few sweeps.
QUICK_TEST = {
    'n_particles': 20,
    'n_iter': 200,
    'neighborhood': 'full',
    'k': 19,
}

# Default preset: the driver settings the solver was tuned with.
DEFAULT = {
    'n_particles': 50,
    'n_iter': 5000,
    'neighborhood': 'scale-free',
    'm': BA_M,
    'm0': BA_M0,
    'k': DEGREE_THRESHOLD,
}

# Fully-informed everywhere: k = 0 sends every connected particle
# through the fully-informed rule.
FULLY_INFORMED = {
    'n_particles': 50,
    'n_iter': 5000,
    'neighborhood': 'scale-free',
    'm': BA_M,
    'm0': BA_M0,
    'k': 0,
}

# Classic gbest PSO: full mesh with a threshold no particle can exceed.
CANONICAL = {
    'n_particles': 50,
    'n_iter': 5000,
    'neighborhood': 'full',
    'k': 50,
}


# Preset lookup helper for convenience in runners / scripts.
PRESETS = {
    'QUICK_TEST': QUICK_TEST,
    'DEFAULT': DEFAULT,
    'FULLY_INFORMED': FULLY_INFORMED,
    'CANONICAL': CANONICAL,
}
