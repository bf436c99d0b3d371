from __future__ import annotations

import math

PI = math.pi
M2_PI = 2.0 * PI
M4_PI = 4.0 * PI
PI_2 = PI / 2.0
I_2PI = 1.0 / M2_PI
I_4PI = 1.0 / M4_PI

MU0_SI = 4 * PI * 1e-7

# relative size below which a magnetization component is treated as absent
FP_CUTOFF = 1e-6
# tolerance for float comparisons
ERR_CUTOFF = 1e-12

NAN = math.nan

__all__ = [
    "PI",
    "M2_PI",
    "M4_PI",
    "PI_2",
    "I_2PI",
    "I_4PI",
    "MU0_SI",
    "FP_CUTOFF",
    "ERR_CUTOFF",
    "NAN",
]
