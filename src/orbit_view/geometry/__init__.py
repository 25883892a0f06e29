"""Affine maps and conic sections."""

from .affine import *
from .conics import *
