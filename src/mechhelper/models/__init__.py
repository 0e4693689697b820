# Data models for materials and the beam calculator
from .material import Material, calculate_shear_modulus
from .inputs import BeamLoadCase, SectionShape, SectionInput, BeamCalculatorInput
from .outputs import CalculationStep, BeamCalculatorOutput
