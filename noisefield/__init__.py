# noisefield/__init__.py
# Scalar noise-field core: base gradient noise plus fractal sums

from .noise import noise, noise_array
from .fractal import (
    InvalidOctaveCount,
    validate_octaves,
    octave_frequencies,
    octave_amplitudes,
    fbm,
    turbulence,
    fbm_array,
    turbulence_array,
)

__all__ = [
    "noise", "noise_array",
    "InvalidOctaveCount", "validate_octaves",
    "octave_frequencies", "octave_amplitudes",
    "fbm", "turbulence", "fbm_array", "turbulence_array",
]
