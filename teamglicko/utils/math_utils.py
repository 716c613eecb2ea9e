"""math utility functions for glicko-2"""
import math
import numpy as np
from scipy.special import expit
from teamglicko.utils.constants import THREE_OVER_PI_SQUARED


def sigmoid(x):
    """logistic function over arrays of scaled rating differences, the E of glicko 2"""
    return expit(x)


def sigmoid_scalar(x):
    """logistic function of a single scaled rating difference"""
    return 1.0 / (1.0 + math.exp(-x))


def g_scalar(phi):
    """this is DIFFERENT from g in regular Glicko"""
    return 1.0 / math.sqrt(1.0 + (THREE_OVER_PI_SQUARED * (phi**2.0)))


def g_vector(phis):
    """vector version"""
    return 1.0 / np.sqrt(1.0 + (THREE_OVER_PI_SQUARED * np.square(phis)))
