"""mathematical constants computed once here to avoid recomputation"""
import math

# general math constants
PI2 = math.pi**2.0
THREE_OVER_PI_SQUARED = 3.0 / PI2

# glicko-2 constants
# converts between the display scale (1500 +/- 350) and the internal scale
SCALING_FACTOR = 173.7178
# convergence tolerance of the volatility solver, fixed by the algorithm
EPSILON = 1e-6
# iteration cap for each loop of the volatility solver
MAX_ITER = 10_000
