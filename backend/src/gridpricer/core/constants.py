"""
Numerical constants shared by the grid engine.

Tolerances are expressed in units of time (year fractions) or variance.
"""

EPS = 1e-10          # generic floating point tolerance
VAR_EPS = 1e-12      # minimal variance increment resolvable by a rollback
OMEGA = 1e20         # stands in for an infinite value
